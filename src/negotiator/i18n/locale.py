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
"""Locale ids — normalization, fallback expansion, aliases and prioritization.

Locale ids are kept in a normalized form: ``-`` replaced with ``_`` and
lower-cased, so ``en-GB`` and ``en_gb`` are the same id.  Fallback chains are
produced by truncating trailing ``_segment`` parts::

    >>> expand_locale_id("en_GB_scouse")
    ['en_gb_scouse', 'en_gb', 'en']
"""

from __future__ import annotations

import functools
import re

# Language subtags taken from an older CLDR release, so probably incomplete.
LANGUAGE_SUBTAGS: frozenset[str] = frozenset(
    """
    aa af ak am ar as asa az be bem bez bg bm bn bo br brx bs byn ca cch cgg
    chr cs cy da dav de dv dz ebu ee el en eo es et eu fa ff fi fil fo fr fur
    ga gaa gez gl gsw gu guz gv ha haw he hi hr hu hy ia id ig ii in is it iu
    iw ja jmc ka kab kaj kam kcg kde kea kfo khq ki kk kl kln km kn ko kok kpe
    ksb ksh ku kw ky lag lg ln lo lt luo luy lv mas mer mfe mg mi mk ml mn mo
    mr ms mt my naq nb nd nds ne nl nn no nr nso ny nyn oc om or pa pl ps pt rm
    ro rof root ru rw rwk sa saq se seh ses sg sh shi si sid sk sl sn so sq sr
    ss ssy st sv sw syr ta te teo tg th ti tig tl tn to tr trv ts tt tzm ug uk
    ur uz ve vi vun wal wo xh xog yo zh zu
    """.split()
)

# Symmetric: each id lists the ids it may stand in for.
LOCALE_ALIASES: dict[str, frozenset[str]] = {
    "no": frozenset({"nb"}),
    "nb": frozenset({"no"}),
}

DEFAULT_LOCALE_IDS: tuple[str, ...] = ("en_us", "en")

_TRAILING_SEGMENT_RE = re.compile(r"_[^_]+$")


def normalize_locale_id(locale_id: str) -> str:
    """Replace ``-`` with ``_`` and lower-case: ``en-GB`` -> ``en_gb``."""
    return locale_id.replace("-", "_").lower()


def expand_locale_id(locale_id: str) -> list[str]:
    """Return *locale_id* followed by its progressively truncated fallbacks."""
    locale_id = normalize_locale_id(locale_id)
    expanded = [locale_id]
    while _TRAILING_SEGMENT_RE.search(locale_id):
        locale_id = _TRAILING_SEGMENT_RE.sub("", locale_id)
        expanded.append(locale_id)
    return expanded


def is_valid_locale_id(locale_id: str) -> bool:
    """True when the (normalized) id starts with a known language subtag."""
    return locale_id.split("_", 1)[0] in LANGUAGE_SUBTAGS


def locale_ids_equal(locale_id1: str, locale_id2: str) -> bool:
    """Exact match, or one id is registered as an alias of the other."""
    return (
        locale_id1 == locale_id2
        or locale_id2 in LOCALE_ALIASES.get(locale_id1, ())
        or locale_id1 in LOCALE_ALIASES.get(locale_id2, ())
    )


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@functools.lru_cache(maxsize=4096)
def prioritized_locale_ids(
    extension_locale_id: str | None,
    query_locale_id: str | None,
    cookie_value: str | None,
    accept_language: str | None,
    default_locale_ids: tuple[str, ...] = DEFAULT_LOCALE_IDS,
) -> tuple[str, ...]:
    """Merge the request's locale preferences into one ordered tuple.

    A locale pinned by the requested file name (``/foo.en_US.html``) is the
    whole answer and must be matched exactly.  Otherwise the query override
    comes first, then each cookie entry and each ``Accept-Language`` token
    expanded into its fallback chain, then *default_locale_ids*.

    ``Accept-Language`` quality values are ignored; only token order counts.
    Duplicates are kept since the scorer stops at the first locale that has
    a candidate.  Results are memoized per distinct argument tuple, keeping
    the 4096 most recent.
    """
    if extension_locale_id:
        return (extension_locale_id,)

    locale_ids: list[str] = []
    if query_locale_id:
        locale_ids.append(normalize_locale_id(query_locale_id))
    if cookie_value:
        for token in _split_csv(cookie_value):
            locale_ids.extend(expand_locale_id(token))
    if accept_language:
        for token in _split_csv(accept_language):
            tag = token.split(";", 1)[0].strip()
            if tag:
                locale_ids.extend(expand_locale_id(tag))
    locale_ids.extend(default_locale_ids)
    return tuple(locale_ids)
