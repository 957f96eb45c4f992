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
"""WebFilterChainMiddleware: pure ASGI middleware running an ordered filter chain."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from secheaders.container.ordering import sort_by_order
from secheaders.web.ports.filter import CallNext, WebFilter


class WebFilterChainMiddleware:
    """Runs :class:`WebFilter` instances around the downstream app.

    Filters are sorted by ``@order`` (stable for equal orders), so global
    header stages and narrower override stages nest predictably regardless
    of the order they were passed in. A filter whose ``should_not_filter()``
    returns ``True`` is skipped for that request.

    The downstream response is buffered into a ``Response`` so filters can
    edit its headers after ``call_next`` returns.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self._filters: list[WebFilter] = sort_by_order(list(filters))

    @property
    def filters(self) -> list[WebFilter]:
        return list(self._filters)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive, send)
        chain: CallNext = self._terminal(scope, receive)
        for web_filter in reversed(self._filters):
            chain = _wrap(web_filter, chain)

        response = cast(Response, await chain(request))
        await response(scope, receive, send)

    def _terminal(self, scope: Scope, receive: Receive) -> CallNext:
        async def _call_app(request: Any) -> Response:
            start: Message = {}
            body = bytearray()

            async def _capture(message: Message) -> None:
                if message["type"] == "http.response.start":
                    start.update(message)
                elif message["type"] == "http.response.body":
                    body.extend(message.get("body", b""))

            await self.app(scope, receive, _capture)

            response = Response(content=bytes(body), status_code=start.get("status", 200))
            response.raw_headers[:] = list(start.get("headers", []))
            return response

        return _call_app


def _wrap(web_filter: WebFilter, next_call: CallNext) -> CallNext:
    async def _inner(request: Request) -> Response:
        if web_filter.should_not_filter(request):
            return cast(Response, await next_call(request))
        return cast(Response, await web_filter.do_filter(request, next_call))

    return _inner
