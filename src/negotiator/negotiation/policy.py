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
"""Response side effects of a negotiated variant."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from negotiator.kernel.exceptions import VariantStatException
from negotiator.negotiation.paths import RequestPath
from negotiator.negotiation.types import ExtensionInfo, NegotiationDecision, VariantInfo

CACHE_CONTROL = "public, max-age=0, must-revalidate"
CONDITIONAL_REQUEST_HEADER = "if-modified-since"


def _stat(path: Path) -> os.stat_result:
    try:
        return os.stat(path)
    except OSError as exc:
        raise VariantStatException(
            f"Failed to stat negotiated variant '{path}': {exc}",
            code="VARIANT_STAT_FAILED",
            context={"path": str(path)},
        ) from exc


class ResponsePolicy:
    """Turns a winning variant into a rewrite decision with response headers.

    The entity tag names whatever the URL left open: the content type unless
    the request's extension pinned one, the locale id likewise, followed by
    the file's size and modification time in milliseconds.  When neither
    is open no tag is computed and the file is never stat-ed.  Whenever a
    tag is set the inbound ``If-Modified-Since`` must be dropped, so a
    validator from a previously served variant cannot produce a 304.
    """

    def __init__(self, user_agent: bool = False) -> None:
        self._vary = "Cookie, Accept-Language, Accept" + (", User-Agent" if user_agent else "")

    @property
    def vary(self) -> str:
        return self._vary

    async def decide(
        self,
        request: RequestPath,
        request_info: ExtensionInfo,
        variant: VariantInfo,
    ) -> NegotiationDecision:
        target_url = request.directory + variant.file_name + request.query
        headers = {
            "Content-Location": target_url[1:],
            "Cache-Control": CACHE_CONTROL,
            "Vary": self._vary,
        }
        if variant.locale_id:
            headers["Content-Language"] = variant.locale_id

        etag_prefix = ""
        if variant.content_type and not request_info.content_type:
            etag_prefix += variant.content_type + "-"
        if variant.locale_id and not request_info.locale_id:
            etag_prefix += variant.locale_id + "-"

        strip: tuple[str, ...] = ()
        if etag_prefix:
            loop = asyncio.get_running_loop()
            stat = await loop.run_in_executor(None, _stat, variant.absolute_path)
            headers["ETag"] = f'"{etag_prefix}{stat.st_size}-{stat.st_mtime_ns // 1_000_000}"'
            strip = (CONDITIONAL_REQUEST_HEADER,)

        return NegotiationDecision(
            target_url=target_url,
            variant=variant,
            response_headers=headers,
            strip_request_headers=strip,
        )
