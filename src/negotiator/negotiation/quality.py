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
"""Quality-value header parsing (``Accept`` style)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QualityToken:
    """One ``value;q=quality`` entry of a preference header."""

    value: str
    quality: float


def _parse_quality_value(params: str) -> float:
    """Return the ``q`` parameter from ``;``-separated *params*, 1.0 when absent."""
    for param in params.split(";"):
        name, sep, raw = param.partition("=")
        if sep and name.strip().lower() == "q":
            try:
                return min(float(raw.strip()), 1.0)
            except ValueError:
                return 0.0
    return 1.0


def parse_quality(header: str) -> list[QualityToken]:
    """Parse a comma-separated preference header into tokens.

    ``"text/html;q=1,text/cache-manifest;q=0.8"`` yields two tokens ordered by
    descending quality.  Entries with a zero or unparseable quality are
    dropped.  The sort is stable, so equal-quality entries keep header order.
    """
    tokens: list[QualityToken] = []
    for item in header.split(","):
        value, _, params = item.partition(";")
        value = value.strip()
        if not value:
            continue
        quality = _parse_quality_value(params) if params else 1.0
        # NaN fails this comparison too
        if quality > 0:
            tokens.append(QualityToken(value=value, quality=quality))
    return sorted(tokens, key=lambda token: -token.quality)
