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
"""Variant negotiation middleware for Starlette — pure ASGI."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, unquote

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from negotiator.negotiation.negotiator import Negotiator
from negotiator.negotiation.types import NegotiationDecision


def request_url(scope: Scope) -> str:
    """Rebuild the undecoded request path plus query string from *scope*."""
    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else quote(scope["path"], safe="/%!$&'()*+,;=:@~")
    query = scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def rewrite_scope(scope: Scope, decision: NegotiationDecision) -> Scope:
    """Return a copy of *scope* pointing at the decision's target path."""
    target_path = decision.target_path
    if target_path is None:
        raise ValueError("A pass-through decision has no target to rewrite to")
    rewritten = dict(scope)
    rewritten["path"] = unquote(target_path)
    rewritten["raw_path"] = target_path.encode("latin-1")
    if decision.strip_request_headers:
        stripped = {name.encode("latin-1") for name in decision.strip_request_headers}
        rewritten["headers"] = [(name, value) for name, value in scope["headers"] if name.lower() not in stripped]
    state = dict(scope.get("state") or {})
    state["variant_info"] = decision.variant
    rewritten["state"] = state
    return rewritten


class VariantNegotiationMiddleware:
    """Rewrites each request to its best file variant before static serving.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so that the
    rewritten path is seen by whatever serves files downstream, e.g.
    :class:`starlette.staticfiles.StaticFiles` mounted on the same root.
    The chosen :class:`~negotiator.negotiation.types.VariantInfo` is exposed
    to downstream handlers as ``request.state.variant_info``.
    """

    def __init__(self, app: ASGIApp, negotiator: Negotiator) -> None:
        self.app = app
        self._negotiator = negotiator

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        decision = await self._negotiator.negotiate(request_url(scope), request.headers, request.cookies)
        if decision.is_pass_through:
            await self.app(scope, receive, send)
            return

        response_headers = decision.response_headers

        async def send_with_headers(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in response_headers.items():
                    headers[name] = value
            await send(message)

        await self.app(rewrite_scope(scope, decision), receive, send_with_headers)
