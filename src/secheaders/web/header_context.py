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
"""Typed access to the per-response header context stored on the request."""

from __future__ import annotations

import inspect
from typing import Any

from secheaders.headers.context import ResponseHeaderContext

_STATE_ATTR = "security_header_context"


def get_header_context(request: Any) -> ResponseHeaderContext:
    """Return the request's :class:`ResponseHeaderContext`, creating it on first use.

    Every stage handling the same request gets the same instance, hence the
    same gate.
    """
    state = request.state
    context = getattr(state, _STATE_ATTR, None)
    if context is None:
        context = ResponseHeaderContext(path=request.url.path)
        setattr(state, _STATE_ATTR, context)
    return context


def handler_identity(endpoint: Any) -> str | None:
    """Dotted name of the handler bound to a request, or None if unrouted.

    Functions and classes give their own qualified name; other callables
    (mounted ASGI apps such as ``StaticFiles``) give their class's.
    """
    if endpoint is None:
        return None
    routine = inspect.isfunction(endpoint) or inspect.ismethod(endpoint) or inspect.isclass(endpoint)
    target = endpoint if routine else type(endpoint)
    return f"{target.__module__}.{target.__qualname__}"


def bind_handler(request: Any, context: ResponseHeaderContext) -> None:
    """Record the routed handler; only known once routing has run."""
    context.handler = handler_identity(request.scope.get("endpoint"))
