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
"""Starlette application factory serving negotiated static files."""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Mount
from starlette.staticfiles import StaticFiles

from negotiator.config.properties.negotiation import NegotiationProperties
from negotiator.negotiation.negotiator import Negotiator
from negotiator.web.adapters.starlette.negotiation_middleware import VariantNegotiationMiddleware


def create_static_app(
    properties: NegotiationProperties,
    negotiator: Negotiator | None = None,
    debug: bool = False,
) -> Starlette:
    """Serve ``properties.root`` with variant negotiation in front.

    The file server searches the roots in the same order as the negotiator,
    so a variant living in a later root is still served.
    """
    properties.validate()
    negotiator = negotiator or Negotiator(properties)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        yield
        await negotiator.close()

    static = StaticFiles(directory=properties.root[0], html=True, check_dir=False)
    static.all_directories = list(properties.root)

    return Starlette(
        debug=debug,
        routes=[Mount("/", app=static, name="static")],
        middleware=[Middleware(VariantNegotiationMiddleware, negotiator=negotiator)],
        lifespan=lifespan,
    )
