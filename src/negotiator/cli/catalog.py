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
"""'negotiator catalog' — list the variants of a directory."""

from __future__ import annotations

import asyncio

import click
from rich.table import Table

from negotiator.cli.console import console
from negotiator.config.properties.negotiation import NegotiationProperties
from negotiator.kernel.exceptions import NegotiatorException
from negotiator.negotiation.negotiator import Negotiator


@click.command()
@click.argument("directory", default="/")
@click.option("--root", "roots", multiple=True, required=True, help="Root directory (repeatable, searched in order).")
@click.option("--user-agent-tags", is_flag=True, help="Classify user-agent tag segments.")
def catalog_command(directory: str, roots: tuple[str, ...], user_agent_tags: bool) -> None:
    """List the variants of a root-relative DIRECTORY."""
    if not directory.startswith("/"):
        directory = "/" + directory
    if not directory.endswith("/"):
        directory += "/"

    negotiator = Negotiator(NegotiationProperties(root=list(roots), user_agent=user_agent_tags))
    try:
        groups = asyncio.run(negotiator.catalog.get(directory))
    except NegotiatorException as exc:
        console.print(f"[error]{exc}[/error]")
        raise SystemExit(1) from exc

    if not groups:
        console.print(f"[warning]No variants found in {directory}[/warning]")
        return

    table = Table(title=f"Variants in {directory}", border_style="dim")
    table.add_column("Base name", style="bold")
    table.add_column("File name")
    table.add_column("Locale", style="info")
    table.add_column("Content type")
    table.add_column("Tags", style="dim")
    table.add_column("Negotiable")
    for base_name in sorted(groups):
        for variant in groups[base_name]:
            table.add_row(
                base_name,
                variant.file_name,
                variant.locale_id or "-",
                variant.content_type or "-",
                ", ".join(sorted(variant.tags)) or "-",
                "[success]yes[/success]" if variant.all_extensions_matched else "[dim]exact only[/dim]",
            )
    console.print(table)
