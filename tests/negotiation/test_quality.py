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
"""Tests for quality-ranked header parsing."""

from negotiator.negotiation.quality import QualityToken, parse_quality


class TestParseQuality:
    def test_orders_by_descending_quality(self):
        tokens = parse_quality("text/html;q=0.8,text/cache-manifest;q=1")
        assert tokens == [
            QualityToken("text/cache-manifest", 1.0),
            QualityToken("text/html", 0.8),
        ]

    def test_missing_quality_defaults_to_one(self):
        assert parse_quality("text/html") == [QualityToken("text/html", 1.0)]

    def test_equal_quality_keeps_header_order(self):
        tokens = parse_quality("b/b, a/a, c/c;q=0.5, d/d")
        assert [token.value for token in tokens] == ["b/b", "a/a", "d/d", "c/c"]

    def test_zero_quality_is_dropped(self):
        assert parse_quality("text/html;q=0, */*") == [QualityToken("*/*", 1.0)]

    def test_unparseable_quality_is_dropped(self):
        assert parse_quality("text/html;q=abc") == []

    def test_quality_is_capped_at_one(self):
        assert parse_quality("text/html;q=5") == [QualityToken("text/html", 1.0)]

    def test_other_params_are_ignored(self):
        tokens = parse_quality("text/html;level=1;q=0.5")
        assert tokens == [QualityToken("text/html", 0.5)]

    def test_whitespace_and_empty_entries(self):
        tokens = parse_quality(" text/html ; q=0.9 , , image/webp")
        assert tokens == [QualityToken("image/webp", 1.0), QualityToken("text/html", 0.9)]

    def test_browser_accept_header(self):
        tokens = parse_quality("text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8")
        assert [token.value for token in tokens] == [
            "text/html",
            "application/xhtml+xml",
            "image/webp",
            "application/xml",
            "*/*",
        ]
