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
"""Negotiator negotiation — variant catalog, scoring and the orchestrator."""

from negotiator.negotiation.catalog import VariantCatalog, classify_extensions
from negotiator.negotiation.content_types import ContentTypeRegistry
from negotiator.negotiation.negotiator import Negotiator
from negotiator.negotiation.paths import RequestPath, parse_file_name, parse_request_url
from negotiator.negotiation.policy import ResponsePolicy
from negotiator.negotiation.quality import QualityToken, parse_quality
from negotiator.negotiation.scorer import Selection, score_variant, select_variant
from negotiator.negotiation.types import PASS_THROUGH, ExtensionInfo, NegotiationDecision, VariantInfo
from negotiator.negotiation.user_agent import USER_AGENT_TAGS, RegexUserAgentClassifier, UserAgentTagResolver

__all__ = [
    "PASS_THROUGH",
    "USER_AGENT_TAGS",
    "ContentTypeRegistry",
    "ExtensionInfo",
    "NegotiationDecision",
    "Negotiator",
    "QualityToken",
    "RegexUserAgentClassifier",
    "RequestPath",
    "ResponsePolicy",
    "Selection",
    "UserAgentTagResolver",
    "VariantCatalog",
    "VariantInfo",
    "classify_extensions",
    "parse_file_name",
    "parse_quality",
    "parse_request_url",
    "score_variant",
    "select_variant",
]
