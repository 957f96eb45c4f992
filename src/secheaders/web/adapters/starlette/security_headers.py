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
"""Security headers middleware for Starlette: pure ASGI."""

from __future__ import annotations

from typing import Any

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from secheaders.headers.dispatcher import HeaderDispatcher
from secheaders.headers.settings import SecurityHeadersSettings
from secheaders.web.header_context import bind_handler, get_header_context


class SecurityHeadersMiddleware:
    """Global header pass for apps that do not use the filter chain.

    Headers are written into the ``http.response.start`` message. The
    per-response context lives in the request state, so it shares its gate
    with any filter-chain stage handling the same request.

    Invalid header configuration is logged and that header skipped unless
    ``strict`` is set.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so the response
    body is streamed through untouched.
    """

    def __init__(self, app: ASGIApp, settings: SecurityHeadersSettings | None = None, strict: bool = False) -> None:
        self.app = app
        self._dispatcher = HeaderDispatcher(settings, strict=strict)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        context = get_header_context(request)

        async def send_with_headers(message: Any) -> None:
            if message["type"] == "http.response.start":
                bind_handler(request, context)
                self._dispatcher.apply_all(context, MutableHeaders(scope=message))
            await send(message)

        await self.app(scope, receive, send_with_headers)
