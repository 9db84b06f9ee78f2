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
"""Request URL and on-disk file name grammar.

Both share one restricted character set::

    url       = dir base ext* query?
    dir       = "/" (segment "/")*
    base      = char*
    ext       = "." char*
    query     = "?" anything

``char`` is an ASCII word character or one of ``-~%!$&'()*+,;=:@``.
Directory segments may additionally contain ``.``.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from urllib.parse import unquote

PATH_CHARS = frozenset(string.ascii_letters + string.digits + "_-~%!$&'()*+,;=:@")
SEGMENT_CHARS = PATH_CHARS | {"."}

DEFAULT_BASE_NAME = "index"


@dataclass(frozen=True)
class FileName:
    """A file name split into its base name and ``.``-delimited extension segments."""

    base_name: str
    extensions: tuple[str, ...]


@dataclass(frozen=True)
class RequestPath:
    """A parsed request URL.

    ``base_name`` and ``extensions`` are percent-decoded; ``directory`` and
    ``query`` are kept verbatim so they can be carried into a rewritten URL.
    """

    directory: str
    base_name: str
    extensions: tuple[str, ...]
    query: str

    @property
    def extension_string(self) -> str:
        return "".join("." + ext for ext in self.extensions)

    @property
    def file_name(self) -> str:
        return self.base_name + self.extension_string


def _split_extensions(name: str) -> FileName:
    base_name, dot, rest = name.partition(".")
    extensions = tuple(rest.split(".")) if dot else ()
    return FileName(base_name=base_name or DEFAULT_BASE_NAME, extensions=extensions)


def parse_file_name(name: str) -> FileName | None:
    """Parse an on-disk file name; ``None`` when it falls outside the grammar."""
    if not all(char in SEGMENT_CHARS for char in name):
        return None
    return _split_extensions(name)


def parse_request_url(url: str) -> RequestPath | None:
    """Tokenize a request URL; ``None`` when it falls outside the grammar."""
    path, sep, query = url.partition("?")
    query = sep + query
    if not path.startswith("/"):
        return None

    directory, _, name = path.rpartition("/")
    segments = directory.split("/")[1:]
    for segment in segments:
        if not all(char in SEGMENT_CHARS for char in segment):
            return None
        # checked decoded: %2e%2e and %2F must not leave the root
        decoded = unquote(segment)
        if decoded in ("", ".", "..") or "/" in decoded or "\\" in decoded:
            return None
    if not all(char in SEGMENT_CHARS for char in name):
        return None

    parsed = _split_extensions(name)
    return RequestPath(
        directory=directory + "/",
        base_name=unquote(parsed.base_name),
        extensions=tuple(unquote(ext) for ext in parsed.extensions),
        query=query,
    )
