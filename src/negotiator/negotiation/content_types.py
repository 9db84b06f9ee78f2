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
"""Content type lookup by file extension."""

from __future__ import annotations

import mimetypes
from collections.abc import Mapping

# Extensions the stdlib table does not know about.
EXTRA_CONTENT_TYPES: dict[str, str] = {
    "appcache": "text/cache-manifest",
    "manifest": "text/cache-manifest",
}


class ContentTypeRegistry:
    """Maps a bare extension (``"html"``) to its content type.

    Backed by a private :class:`mimetypes.MimeTypes` built from the stdlib
    defaults only, so results do not depend on the host's ``mime.types``
    files.  Lookups are case-sensitive.
    """

    def __init__(self, extra: Mapping[str, str] | None = None) -> None:
        self._mime = mimetypes.MimeTypes()
        for extension, content_type in {**EXTRA_CONTENT_TYPES, **(extra or {})}.items():
            self._mime.add_type(content_type, "." + extension.lstrip("."))

    def content_type(self, extension: str) -> str | None:
        return self._mime.types_map[True].get("." + extension)
