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
"""Content-Security-Policy model, override resolution, and serialization."""

from secheaders.headers.csp.directives import (
    DIRECTIVE_ORDER,
    CspDirective,
    CspDirectiveConfig,
    CspPluginTypesConfig,
    CspReportUriConfig,
    CspSandboxConfig,
    CspToggleConfig,
    DirectiveValue,
    SandboxFlag,
)
from secheaders.headers.csp.overrides import DirectiveOverride, OverrideMode, resolve_directive, resolve_overrides
from secheaders.headers.csp.policy import CspPolicy, CspPolicyAggregator
from secheaders.headers.csp.serializer import serialize_policy

__all__ = [
    "DIRECTIVE_ORDER",
    "CspDirective",
    "CspDirectiveConfig",
    "CspPluginTypesConfig",
    "CspPolicy",
    "CspPolicyAggregator",
    "CspReportUriConfig",
    "CspSandboxConfig",
    "CspToggleConfig",
    "DirectiveOverride",
    "DirectiveValue",
    "OverrideMode",
    "SandboxFlag",
    "resolve_directive",
    "resolve_overrides",
    "serialize_policy",
]
