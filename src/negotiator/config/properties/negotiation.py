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
"""Negotiation configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from negotiator.core.config import config_properties
from negotiator.kernel.exceptions import ConfigurationException


@config_properties(prefix="negotiator")
@dataclass
class NegotiationProperties:
    """Configuration for variant negotiation (negotiator.*)."""

    root: list[str] = field(default_factory=list)
    cookie_name: str | None = None
    user_agent: bool = False
    watch: bool = False
    default_locales: list[str] = field(default_factory=lambda: ["en_us", "en"])
    content_types: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.root, str):
            self.root = [part.strip() for part in self.root.split(",") if part.strip()]

    def validate(self) -> None:
        """Raise ``ConfigurationException`` when no root directory is configured."""
        if not self.root:
            raise ConfigurationException(
                "negotiator.root is required: configure at least one root directory",
                code="ROOT_REQUIRED",
            )
