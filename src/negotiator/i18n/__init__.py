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
"""Negotiator i18n — locale id handling and preference merging."""

from negotiator.i18n.locale import (
    DEFAULT_LOCALE_IDS,
    LOCALE_ALIASES,
    expand_locale_id,
    is_valid_locale_id,
    locale_ids_equal,
    normalize_locale_id,
    prioritized_locale_ids,
)

__all__ = [
    "DEFAULT_LOCALE_IDS",
    "LOCALE_ALIASES",
    "expand_locale_id",
    "is_valid_locale_id",
    "locale_ids_equal",
    "normalize_locale_id",
    "prioritized_locale_ids",
]
