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
"""State carried by one in-flight response through every header stage."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from secheaders.headers.gate import ResponseHeaderGate
from secheaders.headers.kinds import HeaderKind
from secheaders.headers.overrides import HeaderOverride


class MutableHeaderCollection(Protocol):
    """The subset of a response header mapping the dispatcher writes through.

    ``starlette.datastructures.MutableHeaders`` satisfies it.
    """

    def __setitem__(self, key: str, value: str) -> None: ...
    def __delitem__(self, key: str) -> None: ...
    def __contains__(self, key: object) -> bool: ...


@dataclass
class ResponseHeaderContext:
    """Gate, accumulated overrides, and request facts for one response.

    ``overrides`` keeps registration order, which is stage-execution order.
    """

    path: str = "/"
    handler: str | None = None
    overrides: list[HeaderOverride] = field(default_factory=list)
    gate: ResponseHeaderGate = field(default_factory=ResponseHeaderGate)

    def add_overrides(self, overrides: Iterable[HeaderOverride]) -> None:
        self.overrides.extend(overrides)

    def overrides_for(self, kind: HeaderKind) -> list[HeaderOverride]:
        return [o for o in self.overrides if o.kind == kind]
