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
"""Shared fixtures for negotiator tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from negotiator.i18n.locale import prioritized_locale_ids


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> content) under *root*."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    def _make(files: dict[str, str], name: str = "root") -> Path:
        return write_tree(tmp_path / name, files)

    return _make


@pytest.fixture(autouse=True)
def _clear_locale_memo():
    yield
    prioritized_locale_ids.cache_clear()
