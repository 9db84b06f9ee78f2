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
"""Negotiator CLI — inspect and serve negotiated static files."""

from __future__ import annotations

import click


@click.group()
@click.version_option(package_name="static-negotiator")
def cli() -> None:
    """Negotiator — locale, content-type and device variant selection."""


# Import and register commands
from negotiator.cli.catalog import catalog_command  # noqa: E402
from negotiator.cli.resolve import resolve_command  # noqa: E402
from negotiator.cli.serve import serve_command  # noqa: E402

cli.add_command(resolve_command, name="resolve")
cli.add_command(catalog_command, name="catalog")
cli.add_command(serve_command, name="serve")
