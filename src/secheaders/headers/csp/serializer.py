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
"""Wire-format serialization of a resolved CSP policy."""

from __future__ import annotations

from secheaders.headers.csp.directives import (
    DIRECTIVE_ORDER,
    UNSAFE_EVAL_DIRECTIVES,
    UNSAFE_INLINE_DIRECTIVES,
    CspDirective,
    CspDirectiveConfig,
    CspPluginTypesConfig,
    CspReportUriConfig,
    CspSandboxConfig,
    CspToggleConfig,
    DirectiveValue,
    SandboxFlag,
)
from secheaders.headers.csp.policy import CspPolicy
from secheaders.kernel.exceptions import HeaderConfigurationException

NONE = "'none'"
SELF = "'self'"
UNSAFE_INLINE = "'unsafe-inline'"
UNSAFE_EVAL = "'unsafe-eval'"


def source_tokens(directive: CspDirective, config: CspDirectiveConfig, header: str = "csp") -> list[str]:
    """Token list for a source-list directive.

    ``'none'`` combined with any other source is rejected rather than
    emitted as a contradictory list.
    """
    if config.none:
        if config.has_sources:
            raise HeaderConfigurationException(
                header,
                f"{directive}.none",
                f"'none' cannot be combined with other sources on {directive}",
            )
        return [NONE]

    tokens: list[str] = []
    if config.self_src:
        tokens.append(SELF)
    if config.unsafe_inline and directive in UNSAFE_INLINE_DIRECTIVES:
        tokens.append(UNSAFE_INLINE)
    if config.unsafe_eval and directive in UNSAFE_EVAL_DIRECTIVES:
        tokens.append(UNSAFE_EVAL)
    if config.source:
        tokens.append(config.source)
    tokens.extend(config.custom_sources)
    return tokens


def report_uri_tokens(config: CspReportUriConfig) -> list[str]:
    tokens = [config.report_uri] if config.report_uri else []
    tokens.extend(config.report_uris)
    return tokens


def directive_block(directive: CspDirective, value: DirectiveValue | None, header: str = "csp") -> str | None:
    """``"<name> <tokens>;"`` for one directive, or None when it is not emitted."""
    if value is None or value.inherited:
        return None

    tokens: list[str]
    if isinstance(value, CspDirectiveConfig):
        tokens = source_tokens(directive, value, header)
        if not tokens:
            return None
    elif isinstance(value, CspSandboxConfig):
        if not value.enabled:
            return None
        tokens = [flag.value for flag in SandboxFlag if flag in value.flags]
    elif isinstance(value, CspPluginTypesConfig):
        if not value.enabled or not value.media_types:
            return None
        tokens = list(value.media_types)
    elif isinstance(value, CspToggleConfig):
        if not value.enabled:
            return None
        tokens = []
    elif isinstance(value, CspReportUriConfig):
        tokens = report_uri_tokens(value)
        if not tokens:
            return None
    else:
        raise HeaderConfigurationException(
            header, str(directive), f"unsupported directive value {type(value).__name__}"
        )

    if tokens:
        return f"{directive} {' '.join(tokens)};"
    return f"{directive};"


def serialize_policy(policy: CspPolicy, header: str = "csp") -> str:
    """Serialize *policy* to a header value.

    Directives appear in the fixed ``DIRECTIVE_ORDER``; the value has no
    trailing separator. An empty string means nothing should be written.
    """
    blocks = [
        block
        for directive in DIRECTIVE_ORDER
        if (block := directive_block(directive, policy.directive(directive), header)) is not None
    ]
    value = " ".join(blocks)
    if value.endswith(";"):
        value = value[:-1]
    return value
