# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Exception hierarchy for the negotiator.

All negotiator exceptions inherit from NegotiatorException so a host can
catch the whole family in one place.

Categories:
- ConfigurationException: invalid or missing setup, raised before any request
- InfrastructureException: filesystem failures while scanning or stat-ing
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class NegotiatorException(Exception):
    """Base exception for all negotiator errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CATALOG_SCAN_FAILED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Setup Exceptions
# =============================================================================


class ConfigurationException(NegotiatorException):
    """Required configuration is missing or malformed."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(NegotiatorException):
    """Filesystem failures surfaced to the host pipeline."""


class CatalogScanException(InfrastructureException):
    """Listing or stat-ing a variant directory failed for a reason other than absence."""


class VariantStatException(InfrastructureException):
    """The chosen variant could not be stat-ed while computing its entity tag."""
