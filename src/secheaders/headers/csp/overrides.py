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
"""Directive override resolution.

An override asks to disable, replace, or append to one directive. Overrides
are folded left to right in the order pipeline stages registered them, each
result becoming the base of the next, so the outcome depends on order:

    append("a") then replace("b")  ->  "b"
    replace("b") then append("a")  ->  "b a"
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from secheaders.headers.csp.directives import (
    DIRECTIVE_VALUE_TYPES,
    CspDirective,
    DirectiveValue,
    empty_value,
    with_inherited,
)
from secheaders.kernel.exceptions import ConfigurationException


class OverrideMode(StrEnum):
    DISABLE = "disable"
    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True)
class DirectiveOverride:
    """A request to change one directive's configuration.

    Use the ``disable`` / ``replace`` / ``append`` constructors rather than
    building instances by hand.
    """

    mode: OverrideMode
    config: Any = None

    def __post_init__(self) -> None:
        if self.mode is not OverrideMode.DISABLE and self.config is None:
            raise ConfigurationException(
                f"A '{self.mode}' override needs a directive configuration",
                code="OVERRIDE_CONFIG",
            )

    @classmethod
    def disable(cls) -> DirectiveOverride:
        return cls(OverrideMode.DISABLE)

    @classmethod
    def replace(cls, config: DirectiveValue) -> DirectiveOverride:
        return cls(OverrideMode.REPLACE, config)

    @classmethod
    def append(cls, config: DirectiveValue) -> DirectiveOverride:
        return cls(OverrideMode.APPEND, config)

    def check_target(self, directive: CspDirective) -> None:
        """Raise if the carried configuration does not fit *directive*."""
        if self.config is None:
            return
        expected = DIRECTIVE_VALUE_TYPES[directive]
        if not isinstance(self.config, expected):
            raise ConfigurationException(
                f"Override for '{directive}' expects {expected.__name__}, got {type(self.config).__name__}",
                code="OVERRIDE_CONFIG",
                context={"directive": str(directive)},
            )


def resolve_directive(
    directive: CspDirective,
    base: DirectiveValue | None,
    override: DirectiveOverride | None,
) -> DirectiveValue:
    """Compute the effective value of *directive* after one override.

    An absent *base* counts as empty. Without an override the base passes
    through unchanged, or becomes an inherited empty value when absent.
    """
    if override is None:
        if base is None:
            return empty_value(directive, inherited=True)
        return base

    override.check_target(directive)

    if override.mode is OverrideMode.DISABLE:
        return empty_value(directive, inherited=False)

    if override.mode is OverrideMode.REPLACE:
        return with_inherited(override.config, False)

    current = base if base is not None else empty_value(directive)
    return with_inherited(current.merged_with(override.config), False)


def resolve_overrides(
    directive: CspDirective,
    base: DirectiveValue | None,
    overrides: Iterable[DirectiveOverride],
) -> DirectiveValue:
    """Fold *overrides* over *base* in the given order."""
    pending = list(overrides)
    if not pending:
        return resolve_directive(directive, base, None)

    result = base
    for override in pending:
        result = resolve_directive(directive, result, override)
    return result
