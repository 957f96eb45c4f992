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
"""Per-response guard that lets each header kind be decided exactly once."""

from __future__ import annotations

from secheaders.headers.kinds import HeaderKind


class ResponseHeaderGate:
    """Set of header kinds already claimed for one response.

    Never shared between responses. Stages touching one response run
    sequentially, so no locking is needed.
    """

    __slots__ = ("_claimed",)

    def __init__(self) -> None:
        self._claimed: set[HeaderKind] = set()

    def try_claim(self, kind: HeaderKind) -> bool:
        """Claim *kind*; True only for the first claim on this response."""
        kind = HeaderKind(kind)
        if kind in self._claimed:
            return False
        self._claimed.add(kind)
        return True

    def is_claimed(self, kind: HeaderKind) -> bool:
        return HeaderKind(kind) in self._claimed

    @property
    def claimed(self) -> frozenset[HeaderKind]:
        return frozenset(self._claimed)

    def __repr__(self) -> str:
        return f"ResponseHeaderGate(claimed={sorted(self._claimed)!r})"
