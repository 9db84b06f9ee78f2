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
"""Variant scoring and selection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from negotiator.i18n.locale import locale_ids_equal
from negotiator.negotiation.quality import QualityToken
from negotiator.negotiation.types import VariantInfo
from negotiator.negotiation.user_agent import USER_AGENT_TAGS

PINNED_CONTENT_TYPE_SCORE = 2.0
TAG_MATCH_BONUS = 0.001
TAG_MISMATCH_PENALTY = 0.00001


@dataclass(frozen=True)
class Selection:
    """The winning variant, its score and the locale id it was chosen for."""

    variant: VariantInfo
    score: float
    locale_id: str


def _accept_quality(variant: VariantInfo, accept_tokens: Sequence[QualityToken]) -> float:
    """Quality of the first Accept token covering the variant's content type."""
    type_, subtype = variant.content_type_fragments or ("", "")
    acceptable = {variant.content_type, "*/*", "*", f"*/{subtype}", f"{type_}/*"}
    for token in accept_tokens:
        if token.value in acceptable:
            return token.quality
    return 0.0


def score_variant(
    variant: VariantInfo,
    *,
    pinned_content_type: str | None = None,
    accept_tokens: Sequence[QualityToken] | None = None,
    requester_tags: frozenset[str] | None = None,
) -> float:
    """Score *variant* against the request.

    A content type pinned by the request's own extension scores 2.0.
    Otherwise the Accept header decides (0 when nothing covers the type),
    and without an Accept header every variant scores 1.0.

    With *requester_tags*, each tag shared with the variant adds 0.001 and
    each tag present on only one side costs 0.00001.
    """
    if variant.content_type is None:
        score = 1.0
    elif pinned_content_type is not None and pinned_content_type == variant.content_type:
        score = PINNED_CONTENT_TYPE_SCORE
    elif accept_tokens is not None:
        score = _accept_quality(variant, accept_tokens)
    else:
        score = 1.0

    if requester_tags is not None:
        for tag in USER_AGENT_TAGS:
            requested = tag in requester_tags
            offered = tag in variant.tags
            if requested and offered:
                score += TAG_MATCH_BONUS
            if requested != offered:
                score -= TAG_MISMATCH_PENALTY
    return score


def _replaces(variant: VariantInfo, score: float, best: VariantInfo, best_score: float, locale_id: str) -> bool:
    if score > best_score:
        return True
    if score != best_score:
        return False
    if variant.is_html and not best.is_html:
        return True
    # an exact locale match beats one that only matched through an alias
    return variant.locale_id == locale_id and best.locale_id is not None and best.locale_id != locale_id


def select_variant(
    file_name: str,
    variants: Sequence[VariantInfo],
    locale_ids: Sequence[str],
    *,
    pinned_content_type: str | None = None,
    accept_tokens: Sequence[QualityToken] | None = None,
    requester_tags: frozenset[str] | None = None,
) -> Selection | None:
    """Pick the best variant for the highest-priority locale that has one.

    Returns ``None`` to pass the request through: when a variant is named
    exactly *file_name*, or when no variant scores above zero for any
    locale id.
    """
    if any(variant.file_name == file_name for variant in variants):
        return None

    for locale_id in locale_ids:
        best: VariantInfo | None = None
        best_score = 0.0
        for variant in variants:
            if not variant.all_extensions_matched:
                continue
            if variant.locale_id is not None and not locale_ids_equal(variant.locale_id, locale_id):
                continue
            score = score_variant(
                variant,
                pinned_content_type=pinned_content_type,
                accept_tokens=accept_tokens,
                requester_tags=requester_tags,
            )
            if score <= 0:
                continue
            if best is None or _replaces(variant, score, best, best_score, locale_id):
                best, best_score = variant, score
        if best is not None:
            return Selection(variant=best, score=best_score, locale_id=locale_id)
    return None
