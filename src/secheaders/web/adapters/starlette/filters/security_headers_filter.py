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
"""Security headers filter: the global pass over every response."""

from __future__ import annotations

from typing import cast

from starlette.requests import Request
from starlette.responses import Response

from secheaders.config.properties.headers import SecurityHeadersProperties
from secheaders.container.ordering import HIGHEST_PRECEDENCE, order
from secheaders.core.config import Config
from secheaders.headers.dispatcher import HeaderDispatcher
from secheaders.headers.settings import SecurityHeadersSettings
from secheaders.logging.structlog_adapter import StructlogAdapter
from secheaders.web.filters import OncePerRequestFilter
from secheaders.web.header_context import bind_handler, get_header_context
from secheaders.web.ports.filter import CallNext


@order(HIGHEST_PRECEDENCE + 300)
class SecurityHeadersFilter(OncePerRequestFilter):
    """Applies every header kind not already decided by a narrower stage.

    Runs outermost among header stages, so on the response path it is the
    last to see the response and only fills in what remains unclaimed.
    A header whose configuration is invalid is logged and left off the
    response; with ``strict=True`` the error propagates instead.
    """

    def __init__(self, settings: SecurityHeadersSettings | None = None, strict: bool = False) -> None:
        self._dispatcher = HeaderDispatcher(settings, strict=strict)

    @classmethod
    def from_config(cls, config: Config) -> SecurityHeadersFilter:
        """Configure logging from ``secheaders.logging`` and build the filter from ``secheaders.headers``."""
        StructlogAdapter().configure(config)
        properties = config.bind(SecurityHeadersProperties)
        return cls(properties.to_settings(), strict=properties.strict)

    @property
    def dispatcher(self) -> HeaderDispatcher:
        return self._dispatcher

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        context = get_header_context(request)
        response = cast(Response, await call_next(request))
        bind_handler(request, context)
        self._dispatcher.apply_all(context, response.headers)
        return response
