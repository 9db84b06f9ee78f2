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
"""User-agent tag vocabulary and the default classifier."""

from __future__ import annotations

import functools
import re

from negotiator.negotiation.ports.outbound import UserAgentClassifier

BASE_USER_AGENT_TAGS: tuple[str, ...] = (
    "touch",
    "ie",
    "chrome",
    "phantom",
    "safari",
    "ios",
    "iphone",
    "ipad",
    "touchpad",
    "android",
    "opera",
    "firefox",
    "seamonkey",
)

# Every tag is paired with its negation: touch / nontouch, ie / nonie, ...
USER_AGENT_TAGS: tuple[str, ...] = BASE_USER_AGENT_TAGS + tuple("non" + tag for tag in BASE_USER_AGENT_TAGS)

_USER_AGENT_TAG_SET = frozenset(USER_AGENT_TAGS)


def is_user_agent_tag(segment: str) -> bool:
    return segment in _USER_AGENT_TAG_SET


class RegexUserAgentClassifier:
    """Substring-pattern classifier covering the base tag vocabulary."""

    _PATTERNS: dict[str, re.Pattern[str]] = {
        "iphone": re.compile(r"iPhone"),
        "ipad": re.compile(r"iPad"),
        "ios": re.compile(r"iPhone|iPad|iPod"),
        "android": re.compile(r"Android"),
        "touchpad": re.compile(r"hp-tablet|TouchPad"),
        "ie": re.compile(r"MSIE|Trident/"),
        "opera": re.compile(r"Opera|OPR/"),
        "chrome": re.compile(r"Chrome/|CriOS/"),
        "phantom": re.compile(r"PhantomJS"),
        "firefox": re.compile(r"Firefox/"),
        "seamonkey": re.compile(r"SeaMonkey/"),
    }
    _SAFARI = re.compile(r"Safari/")
    _TOUCH = re.compile(r"[;(]\s*Touch\b")

    def classify(self, user_agent: str) -> dict[str, bool]:
        tags = {tag: True for tag, pattern in self._PATTERNS.items() if pattern.search(user_agent)}
        if self._SAFARI.search(user_agent) and not tags.keys() & {"chrome", "opera", "phantom", "android"}:
            tags["safari"] = True
        if tags.keys() & {"ios", "android", "touchpad"} or self._TOUCH.search(user_agent):
            tags["touch"] = True
        return tags


class UserAgentTagResolver:
    """Resolves a ``User-Agent`` string to a full tag set, memoized per string.

    For every base tag the classifier does not report, the paired
    ``non<tag>`` is set, so exactly one of each pair is present.
    """

    def __init__(self, classifier: UserAgentClassifier | None = None, maxsize: int = 1024) -> None:
        self._classifier = classifier or RegexUserAgentClassifier()
        self._cached_resolve = functools.lru_cache(maxsize=maxsize)(self._resolve)

    def resolve(self, user_agent: str) -> frozenset[str]:
        return self._cached_resolve(user_agent)

    def _resolve(self, user_agent: str) -> frozenset[str]:
        classified = self._classifier.classify(user_agent)
        tags = {tag for tag in BASE_USER_AGENT_TAGS if classified.get(tag)}
        tags.update("non" + tag for tag in BASE_USER_AGENT_TAGS if tag not in tags)
        return frozenset(tags)
