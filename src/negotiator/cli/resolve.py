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
"""'negotiator resolve' — show which variant a request would be rewritten to."""

from __future__ import annotations

import asyncio

import click
from rich.table import Table

from negotiator.cli.console import console
from negotiator.config.properties.negotiation import NegotiationProperties
from negotiator.kernel.exceptions import NegotiatorException
from negotiator.negotiation.negotiator import Negotiator


def _parse_cookies(values: tuple[str, ...]) -> dict[str, str]:
    cookies: dict[str, str] = {}
    for value in values:
        name, sep, cookie = value.partition("=")
        if not sep:
            raise click.BadParameter(f"expected NAME=VALUE, got '{value}'", param_hint="--cookie")
        cookies[name.strip()] = cookie.strip()
    return cookies


@click.command()
@click.argument("url")
@click.option("--root", "roots", multiple=True, required=True, help="Root directory (repeatable, searched in order).")
@click.option("--accept", default=None, help="Accept header value.")
@click.option("--accept-language", default=None, help="Accept-Language header value.")
@click.option("--user-agent", default=None, help="User-Agent header value (enables tag negotiation).")
@click.option("--cookie-name", default=None, help="Cookie carrying the locale preference.")
@click.option("--cookie", "cookies", multiple=True, help="Request cookie as NAME=VALUE (repeatable).")
def resolve_command(
    url: str,
    roots: tuple[str, ...],
    accept: str | None,
    accept_language: str | None,
    user_agent: str | None,
    cookie_name: str | None,
    cookies: tuple[str, ...],
) -> None:
    """Show which variant URL would be rewritten to."""
    properties = NegotiationProperties(root=list(roots), cookie_name=cookie_name, user_agent=user_agent is not None)
    headers = {
        name: value
        for name, value in (("accept", accept), ("accept-language", accept_language), ("user-agent", user_agent))
        if value is not None
    }

    try:
        decision = asyncio.run(Negotiator(properties).negotiate(url, headers, _parse_cookies(cookies)))
    except NegotiatorException as exc:
        console.print(f"[error]{exc}[/error]")
        raise SystemExit(1) from exc

    if decision.is_pass_through:
        console.print(f"[dim]pass through[/dim] {url}")
        return

    console.print(f"[success]{url}[/success] -> [info]{decision.target_url}[/info]")
    table = Table(title="Response headers", show_header=False, border_style="dim")
    table.add_column("Header", style="info")
    table.add_column("Value")
    for name, value in decision.response_headers.items():
        table.add_row(name, value)
    console.print(table)
