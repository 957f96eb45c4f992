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
"""Header override filter: a narrower stage declaring per-route overrides."""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from secheaders.headers.dispatcher import HeaderDispatcher
from secheaders.headers.kinds import HeaderKind
from secheaders.headers.overrides import HeaderOverride
from secheaders.web.filters import OncePerRequestFilter
from secheaders.web.header_context import bind_handler, get_header_context
from secheaders.web.ports.filter import CallNext

logger = structlog.get_logger("secheaders.web")


class HeaderOverrideFilter(OncePerRequestFilter):
    """Registers an ordered list of overrides for matching requests.

    On the request path the overrides are appended to the response context,
    so stages contribute in the order they execute. On the response path the
    filter applies the header kinds it overrides; the innermost matching
    stage claims them with every registered override in view, and outer
    stages find them already claimed. Configuration errors are handled per the
    dispatcher's ``strict`` setting.

    Usage::

        HeaderOverrideFilter(
            dispatcher,
            overrides=[CspOverride(CspDirective.SCRIPT_SRC, DirectiveOverride.append(...))],
            url_patterns=["/admin/*"],
            order_value=10,
        )
    """

    def __init__(
        self,
        dispatcher: HeaderDispatcher,
        overrides: Sequence[HeaderOverride],
        url_patterns: Sequence[str] = (),
        exclude_patterns: Sequence[str] = (),
        order_value: int = 0,
    ) -> None:
        self._dispatcher = dispatcher
        self._overrides = tuple(overrides)
        self.url_patterns = tuple(url_patterns)
        self.exclude_patterns = tuple(exclude_patterns)
        self.__secheaders_order__ = order_value

    @property
    def overrides(self) -> tuple[HeaderOverride, ...]:
        return self._overrides

    @property
    def kinds(self) -> list[HeaderKind]:
        """Header kinds this stage overrides, in first-declared order."""
        return list(dict.fromkeys(o.kind for o in self._overrides))

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        context = get_header_context(request)
        context.add_overrides(self._overrides)
        logger.debug(
            "security_header_overrides_registered",
            path=context.path,
            count=len(self._overrides),
        )

        response = cast(Response, await call_next(request))
        bind_handler(request, context)
        self._dispatcher.apply_all(context, response.headers, self.kinds)
        return response
