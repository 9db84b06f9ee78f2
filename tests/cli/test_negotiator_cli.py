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
"""Tests for the negotiator CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from negotiator.cli.console import console
from negotiator.cli.main import cli
from negotiator.cli.serve import load_properties
from negotiator.core.config import Config


@pytest.fixture(autouse=True)
def _wide_console(monkeypatch):
    monkeypatch.setattr(console, "width", 200)


@pytest.fixture
def site(make_tree) -> Path:
    return make_tree({
        "index.en_US.html": "",
        "index.da.html": "",
        "index.touch.html": "",
        "other.html": "",
    })


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("resolve", "catalog", "serve"):
            assert command in result.output


class TestResolveCommand:
    def test_resolves_default_locale(self, site):
        result = CliRunner().invoke(cli, ["resolve", "/", "--root", str(site)])
        assert result.exit_code == 0, result.output
        assert "/index.en_US.html" in result.output
        assert "Content-Language" in result.output

    def test_accept_language(self, site):
        result = CliRunner().invoke(cli, ["resolve", "/", "--root", str(site), "--accept-language", "da"])
        assert result.exit_code == 0, result.output
        assert "/index.da.html" in result.output

    def test_cookie(self, site):
        result = CliRunner().invoke(
            cli, ["resolve", "/", "--root", str(site), "--cookie-name", "locale", "--cookie", "locale=da"]
        )
        assert result.exit_code == 0, result.output
        assert "/index.da.html" in result.output

    def test_malformed_cookie(self, site):
        result = CliRunner().invoke(cli, ["resolve", "/", "--root", str(site), "--cookie", "locale"])
        assert result.exit_code != 0

    def test_pass_through(self, site):
        result = CliRunner().invoke(cli, ["resolve", "/other.html", "--root", str(site)])
        assert result.exit_code == 0, result.output
        assert "pass through" in result.output

    def test_requires_root(self):
        result = CliRunner().invoke(cli, ["resolve", "/"])
        assert result.exit_code != 0


class TestCatalogCommand:
    def test_lists_variants(self, site):
        result = CliRunner().invoke(cli, ["catalog", "/", "--root", str(site)])
        assert result.exit_code == 0, result.output
        assert "index.en_US.html" in result.output
        assert "en_us" in result.output
        assert "exact only" in result.output

    def test_user_agent_tags(self, site):
        result = CliRunner().invoke(cli, ["catalog", "--root", str(site), "--user-agent-tags"])
        assert result.exit_code == 0, result.output
        assert "touch" in result.output
        assert "exact only" not in result.output

    def test_empty_directory(self, site):
        result = CliRunner().invoke(cli, ["catalog", "nonexistentdir", "--root", str(site)])
        assert result.exit_code == 0, result.output
        assert "No variants found in /nonexistentdir/" in result.output


class TestServeCommand:
    def test_load_properties_cli_wins(self):
        config = Config({"negotiator": {"root": ["from-config"], "cookie_name": "lang"}})
        properties = load_properties(config, ("from-cli",), None)
        assert properties.root == ["from-cli"]
        assert properties.cookie_name == "lang"

    def test_load_properties_from_config(self):
        config = Config({"negotiator": {"root": ["public"]}})
        properties = load_properties(config, (), "locale")
        assert properties.root == ["public"]
        assert properties.cookie_name == "locale"

    def test_missing_root_exits(self):
        result = CliRunner().invoke(cli, ["serve"])
        assert result.exit_code == 1
        assert "negotiator.root is required" in result.output
