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
"""Tests for user-agent classification and tag resolution."""

from negotiator.negotiation.user_agent import (
    BASE_USER_AGENT_TAGS,
    USER_AGENT_TAGS,
    RegexUserAgentClassifier,
    UserAgentTagResolver,
    is_user_agent_tag,
)

IPAD = (
    "Mozilla/5.0 (iPad; U; CPU OS 4_3_2 like Mac OS X; en-us) AppleWebKit/533.17.9 "
    "(KHTML, like Gecko) Version/5.0.2 Mobile/8H7 Safari/6533.18.5"
)
IE8 = (
    "Mozilla/4.0 (compatible; MSIE 8.0; Windows NT 6.1; Trident/5.0; SLCC2; .NET CLR 2.0.50727; "
    ".NET CLR 3.5.30729; .NET CLR 3.0.30729; Media Center PC 6.0; .NET4.0C)"
)
IE10_TOUCH = "Mozilla/5.0 (compatible; MSIE 10.0; Windows NT 6.2; ARM; Trident/6.0; Touch)"
CHROME = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


class TestTagVocabulary:
    def test_every_tag_has_a_negation(self):
        assert len(USER_AGENT_TAGS) == 2 * len(BASE_USER_AGENT_TAGS)
        assert "nontouch" in USER_AGENT_TAGS

    def test_is_user_agent_tag(self):
        assert is_user_agent_tag("touch")
        assert is_user_agent_tag("nonie")
        assert not is_user_agent_tag("html")


class TestRegexUserAgentClassifier:
    def test_ipad(self):
        tags = RegexUserAgentClassifier().classify(IPAD)
        assert tags.keys() >= {"ipad", "ios", "safari", "touch"}
        assert "iphone" not in tags

    def test_ie8_is_not_touch(self):
        tags = RegexUserAgentClassifier().classify(IE8)
        assert tags.get("ie")
        assert "touch" not in tags

    def test_ie10_touch(self):
        tags = RegexUserAgentClassifier().classify(IE10_TOUCH)
        assert tags.get("ie")
        assert tags.get("touch")

    def test_chrome_is_not_safari(self):
        tags = RegexUserAgentClassifier().classify(CHROME)
        assert tags.get("chrome")
        assert "safari" not in tags


class FakeClassifier:
    def __init__(self) -> None:
        self.calls = 0

    def classify(self, user_agent: str) -> dict[str, bool]:
        self.calls += 1
        return {"touch": True, "unknown": True}


class TestUserAgentTagResolver:
    def test_adds_negations_for_absent_tags(self):
        tags = UserAgentTagResolver().resolve(IE8)
        assert "ie" in tags
        assert "nontouch" in tags
        assert "nonie" not in tags
        assert "touch" not in tags

    def test_exactly_one_of_each_pair(self):
        tags = UserAgentTagResolver().resolve(IPAD)
        for tag in BASE_USER_AGENT_TAGS:
            assert (tag in tags) != ("non" + tag in tags)

    def test_unknown_classifier_tags_are_ignored(self):
        tags = UserAgentTagResolver(FakeClassifier()).resolve("x")
        assert "unknown" not in tags
        assert "touch" in tags

    def test_memoized_per_string(self):
        classifier = FakeClassifier()
        resolver = UserAgentTagResolver(classifier)
        resolver.resolve("a")
        resolver.resolve("a")
        resolver.resolve("b")
        assert classifier.calls == 2
