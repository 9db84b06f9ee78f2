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
"""Variant catalog — per-directory index of file variants grouped by base name.

Every file name is read as ``base(.segment)*``.  Each segment is classified
on its own, left to right, and later segments of the same kind win:

1. a known locale id (``en_US``, ``da``) sets the locale,
2. else a known extension (``html``) sets the content type,
3. else, when user-agent negotiation is on, a tag (``touch``) is added,
4. else the file is marked as not fully matched and only serves exact requests.

Segments that are both a locale id and an extension (``nb``, ``tr``, ...) are
read as locale ids.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterable, Sequence
from pathlib import Path, PurePosixPath
from urllib.parse import unquote

import structlog

from negotiator.cache.single_flight import SingleFlightCache
from negotiator.i18n.locale import is_valid_locale_id, normalize_locale_id
from negotiator.kernel.exceptions import CatalogScanException, ConfigurationException
from negotiator.negotiation.content_types import ContentTypeRegistry
from negotiator.negotiation.paths import parse_file_name
from negotiator.negotiation.ports.outbound import DirectoryWatcher
from negotiator.negotiation.types import ExtensionInfo, VariantGroups, VariantInfo
from negotiator.negotiation.user_agent import is_user_agent_tag

logger = structlog.get_logger("negotiator.catalog")


def classify_extensions(
    extensions: Iterable[str],
    content_types: ContentTypeRegistry,
    include_tags: bool = False,
) -> ExtensionInfo:
    """Classify extension segments into locale, content type and tags."""
    content_type: str | None = None
    locale_id: str | None = None
    tags: set[str] = set()
    all_matched = True

    for extension in extensions:
        candidate = normalize_locale_id(extension)
        if is_valid_locale_id(candidate):
            locale_id = candidate
            continue
        mapped = content_types.content_type(extension)
        if mapped is not None:
            content_type = mapped
        elif include_tags and is_user_agent_tag(extension):
            tags.add(extension)
        else:
            all_matched = False

    return ExtensionInfo(
        content_type=content_type,
        locale_id=locale_id,
        tags=frozenset(tags),
        all_extensions_matched=all_matched,
    )


def _specificity(variant: VariantInfo) -> int:
    return len(variant.locale_id) if variant.locale_id else 0


def _relative_directory(directory: str) -> PurePosixPath | None:
    """Decoded form of a root-relative cache key, ``None`` if it would leave the root."""
    relative = PurePosixPath(unquote(directory.lstrip("/")))
    if relative.is_absolute() or ".." in relative.parts or "\\" in str(relative):
        return None
    return relative


def _list_files(directory: Path) -> list[str] | None:
    """Names of the non-directory entries of *directory*, ``None`` if it is missing.

    Runs in a worker thread.  Entries vanishing between listing and stat are
    skipped; symlinks are not followed.
    """
    try:
        with os.scandir(directory) as entries:
            names: list[str] = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        continue
                except FileNotFoundError:
                    continue
                names.append(entry.name)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        raise CatalogScanException(
            f"Failed to scan variant directory '{directory}': {exc}",
            code="CATALOG_SCAN_FAILED",
            context={"directory": str(directory)},
        ) from exc
    return names


class VariantCatalog:
    """Lazily built, process-lifetime cache of variant groups per directory.

    The cache key is the root-relative directory of the request
    (``"/"``, ``"/subdir/"``).  Variants from all *roots* are merged into one
    group per base name, in root order, then stably sorted so the most
    specific locale ids come first and locale-less variants last.

    Concurrent first requests for a directory share one scan.  When a
    *watcher* is given, a change in any scanned physical directory evicts
    its key; failing to install a watch only leaves the entry permanent.
    """

    def __init__(
        self,
        roots: Sequence[str | Path],
        content_types: ContentTypeRegistry | None = None,
        user_agent: bool = False,
        watcher: DirectoryWatcher | None = None,
    ) -> None:
        if not roots:
            raise ConfigurationException("VariantCatalog requires at least one root directory", code="ROOT_REQUIRED")
        self._roots = [Path(root) for root in roots]
        self._content_types = content_types or ContentTypeRegistry()
        self._user_agent = user_agent
        self._watcher = watcher
        self._cache: SingleFlightCache[str, VariantGroups] = SingleFlightCache(self._build)

    @property
    def roots(self) -> list[Path]:
        return list(self._roots)

    @property
    def content_types(self) -> ContentTypeRegistry:
        return self._content_types

    async def get(self, directory: str) -> VariantGroups:
        """Return the variant groups of a root-relative *directory*."""
        return await self._cache.get(directory)

    def invalidate(self, directory: str) -> bool:
        """Drop the cached groups of *directory*; the next request rescans."""
        evicted = self._cache.evict(directory)
        if evicted:
            logger.debug("catalog_invalidated", directory=directory)
        return evicted

    def classify(self, extensions: Iterable[str]) -> ExtensionInfo:
        return classify_extensions(extensions, self._content_types, include_tags=self._user_agent)

    async def _build(self, directory: str) -> VariantGroups:
        loop = asyncio.get_running_loop()
        relative = _relative_directory(directory)
        if relative is None:
            logger.warning("catalog_directory_rejected", directory=directory)
            return {}
        groups: dict[str, list[VariantInfo]] = {}

        for root in self._roots:
            physical = root / relative
            file_names = await loop.run_in_executor(None, _list_files, physical)
            if file_names is None:
                continue
            self._install_watch(physical, directory)

            for file_name in file_names:
                parsed = parse_file_name(file_name)
                if parsed is None:
                    continue
                variant = VariantInfo.from_extension_info(
                    file_name,
                    physical / file_name,
                    self.classify(parsed.extensions),
                )
                groups.setdefault(parsed.base_name, []).append(variant)

        frozen = {
            base_name: tuple(sorted(variants, key=_specificity, reverse=True))
            for base_name, variants in groups.items()
        }
        logger.debug(
            "catalog_scanned",
            directory=directory,
            roots=len(self._roots),
            base_names=len(frozen),
            variants=sum(len(variants) for variants in frozen.values()),
        )
        return frozen

    def _install_watch(self, physical: Path, directory: str) -> None:
        if self._watcher is None:
            return
        try:
            self._watcher.watch(physical, lambda: self.invalidate(directory))
        except Exception as exc:
            logger.warning("directory_watch_failed", directory=str(physical), error=str(exc))
