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
"""Variant records and negotiation decisions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias

HTML_CONTENT_TYPE = "text/html"


@dataclass(frozen=True)
class ExtensionInfo:
    """Metadata classified from a file name's extension segments."""

    content_type: str | None = None
    locale_id: str | None = None
    tags: frozenset[str] = frozenset()
    all_extensions_matched: bool = True


@dataclass(frozen=True)
class VariantInfo:
    """One on-disk alternative of a logical resource.

    Files whose extensions could not all be classified keep
    ``all_extensions_matched=False``: they are only reachable by exact name.
    """

    file_name: str
    absolute_path: Path
    content_type: str | None = None
    locale_id: str | None = None
    tags: frozenset[str] = frozenset()
    all_extensions_matched: bool = True

    @classmethod
    def from_extension_info(cls, file_name: str, absolute_path: Path, info: ExtensionInfo) -> VariantInfo:
        return cls(
            file_name=file_name,
            absolute_path=absolute_path,
            content_type=info.content_type,
            locale_id=info.locale_id,
            tags=info.tags,
            all_extensions_matched=info.all_extensions_matched,
        )

    @property
    def content_type_fragments(self) -> tuple[str, str] | None:
        """``("text", "html")`` for ``text/html``; ``None`` without a content type."""
        if self.content_type is None:
            return None
        type_, _, subtype = self.content_type.partition("/")
        return type_, subtype

    @property
    def is_html(self) -> bool:
        return self.content_type == HTML_CONTENT_TYPE


# Base name -> variants, most specific locale id first.
VariantGroups: TypeAlias = Mapping[str, tuple[VariantInfo, ...]]


@dataclass(frozen=True)
class NegotiationDecision:
    """Outcome of negotiating one request.

    Either a pass-through (``target_url`` is ``None``) or a rewrite to
    ``target_url`` with ``response_headers`` to set.  ``strip_request_headers``
    lists inbound headers the host must drop before serving the target.
    """

    target_url: str | None = None
    variant: VariantInfo | None = None
    response_headers: Mapping[str, str] = field(default_factory=dict)
    strip_request_headers: tuple[str, ...] = ()

    @property
    def is_pass_through(self) -> bool:
        return self.target_url is None

    @property
    def target_path(self) -> str | None:
        if self.target_url is None:
            return None
        return self.target_url.partition("?")[0]


PASS_THROUGH = NegotiationDecision()
