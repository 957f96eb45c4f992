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
"""CSP policy values and the per-response aggregator that layers overrides."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from secheaders.headers.csp.directives import DIRECTIVE_ORDER, CspDirective, DirectiveValue
from secheaders.headers.csp.overrides import DirectiveOverride, resolve_overrides


@dataclass(frozen=True)
class CspPolicy:
    """One CSP policy (enforcing or report-only).

    ``directives`` holds only the directives configured at this layer;
    anything missing is treated as not configured.
    """

    enabled: bool = False
    directives: Mapping[CspDirective, DirectiveValue] = field(default_factory=dict)
    x_content_security_policy_header: bool = False
    x_webkit_csp_header: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "directives",
            MappingProxyType({CspDirective(k): v for k, v in dict(self.directives).items()}),
        )

    def directive(self, directive: CspDirective) -> DirectiveValue | None:
        return self.directives.get(directive)


class CspPolicyAggregator:
    """Collects directive overrides for one response and resolves them on demand.

    Overrides are only recorded by :meth:`set_directive`; the fold happens in
    :meth:`snapshot`, and its result is cached until another override arrives.
    The base policy is never mutated.
    """

    def __init__(self, base: CspPolicy) -> None:
        self._base = base
        self._overrides: dict[CspDirective, list[DirectiveOverride]] = {}
        self._enabled: bool | None = None
        self._snapshot: CspPolicy | None = None

    @property
    def base(self) -> CspPolicy:
        return self._base

    def set_directive(self, directive: CspDirective, override: DirectiveOverride) -> None:
        directive = CspDirective(directive)
        override.check_target(directive)
        self._overrides.setdefault(directive, []).append(override)
        self._snapshot = None

    def set_enabled(self, enabled: bool) -> None:
        """Switch the whole policy on or off for this response."""
        self._enabled = enabled
        self._snapshot = None

    def is_enabled(self) -> bool:
        if self._enabled is not None:
            return self._enabled
        return self._base.enabled

    def snapshot(self) -> CspPolicy:
        """Effective policy with every directive resolved, in serialization order."""
        if self._snapshot is None:
            resolved = {
                directive: resolve_overrides(
                    directive,
                    self._base.directive(directive),
                    self._overrides.get(directive, ()),
                )
                for directive in DIRECTIVE_ORDER
            }
            self._snapshot = CspPolicy(
                enabled=self.is_enabled(),
                directives=resolved,
                x_content_security_policy_header=self._base.x_content_security_policy_header,
                x_webkit_csp_header=self._base.x_webkit_csp_header,
            )
        return self._snapshot
