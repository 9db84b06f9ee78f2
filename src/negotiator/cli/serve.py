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
"""'negotiator serve' — serve negotiated static files with uvicorn."""

from __future__ import annotations

from pathlib import Path

import click

from negotiator.cli.console import console
from negotiator.config.properties.negotiation import NegotiationProperties
from negotiator.core.config import Config
from negotiator.kernel.exceptions import ConfigurationException
from negotiator.logging.structlog_adapter import StructlogAdapter


def load_properties(config: Config, roots: tuple[str, ...], cookie_name: str | None) -> NegotiationProperties:
    """Bind properties from *config*, letting command-line options win."""
    properties = config.bind(NegotiationProperties)
    if roots:
        properties.root = list(roots)
    if cookie_name:
        properties.cookie_name = cookie_name
    return properties


@click.command()
@click.option("--root", "roots", multiple=True, help="Root directory (repeatable, searched in order).")
@click.option("--config", "config_file", default=None, type=click.Path(exists=True, dir_okay=False), help="YAML or TOML config file.")
@click.option("--cookie-name", default=None, help="Cookie carrying the locale preference.")
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=8080, type=int, help="Port number.")
def serve_command(
    roots: tuple[str, ...],
    config_file: str | None,
    cookie_name: str | None,
    host: str,
    port: int,
) -> None:
    """Serve static files with variant negotiation."""
    import uvicorn

    from negotiator.web.adapters.starlette.app import create_static_app

    config = Config.from_file(config_file) if config_file else Config({})
    properties = load_properties(config, roots, cookie_name)
    try:
        properties.validate()
    except ConfigurationException as exc:
        console.print(f"[error]{exc}[/error]")
        raise SystemExit(1) from exc

    StructlogAdapter().configure(config)

    console.print(f"[negotiator]Serving[/negotiator] {', '.join(str(Path(root)) for root in properties.root)}")
    console.print(f"[dim]http://{host}:{port}/[/dim]")
    uvicorn.run(create_static_app(properties), host=host, port=port, log_level="warning")
