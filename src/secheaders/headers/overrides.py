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
"""Override descriptors contributed by pipeline stages narrower than the global pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from secheaders.headers.csp.directives import CspDirective
from secheaders.headers.csp.overrides import DirectiveOverride
from secheaders.headers.kinds import HeaderKind
from secheaders.headers.settings import HEADER_CONFIG_TYPES
from secheaders.kernel.exceptions import ConfigurationException


@dataclass(frozen=True)
class CspOverride:
    """Change one directive of the enforcing (or report-only) CSP policy."""

    directive: CspDirective
    override: DirectiveOverride
    report_only: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "directive", CspDirective(self.directive))
        self.override.check_target(self.directive)

    @property
    def kind(self) -> HeaderKind:
        return HeaderKind.CSP_REPORT_ONLY if self.report_only else HeaderKind.CSP


@dataclass(frozen=True)
class CspEnabledOverride:
    """Switch a whole CSP policy on or off."""

    enabled: bool
    report_only: bool = False

    @property
    def kind(self) -> HeaderKind:
        return HeaderKind.CSP_REPORT_ONLY if self.report_only else HeaderKind.CSP


@dataclass(frozen=True)
class HeaderConfigOverride:
    """Replace the configuration of a single-value header.

    When several stages replace the same header, the last one registered wins.
    """

    header: HeaderKind
    config: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "header", HeaderKind(self.header))
        expected = HEADER_CONFIG_TYPES.get(self.header)
        if expected is None:
            raise ConfigurationException(
                f"'{self.header}' has no replaceable configuration; use CspOverride or CspEnabledOverride",
                code="OVERRIDE_CONFIG",
                context={"header": self.header.value},
            )
        if not isinstance(self.config, expected):
            raise ConfigurationException(
                f"Override for '{self.header}' expects {expected.__name__}, got {type(self.config).__name__}",
                code="OVERRIDE_CONFIG",
                context={"header": self.header.value},
            )

    @property
    def kind(self) -> HeaderKind:
        return self.header


HeaderOverride = CspOverride | CspEnabledOverride | HeaderConfigOverride
