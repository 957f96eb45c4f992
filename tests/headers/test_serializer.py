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
"""Tests for CSP header value serialization."""

from __future__ import annotations

import pytest

from secheaders.headers.csp.directives import (
    CspDirective,
    CspDirectiveConfig,
    CspPluginTypesConfig,
    CspReportUriConfig,
    CspSandboxConfig,
    CspToggleConfig,
    SandboxFlag,
)
from secheaders.headers.csp.overrides import DirectiveOverride
from secheaders.headers.csp.policy import CspPolicy, CspPolicyAggregator
from secheaders.headers.csp.serializer import directive_block, serialize_policy, source_tokens
from secheaders.kernel.exceptions import HeaderConfigurationException


def _policy(**directives) -> CspPolicy:
    return CspPolicy(
        enabled=True,
        directives={CspDirective(name.replace("_", "-")): value for name, value in directives.items()},
    )


class TestSourceTokens:
    def test_keyword_order(self):
        config = CspDirectiveConfig(
            self_src=True,
            unsafe_inline=True,
            unsafe_eval=True,
            source="legacy.com",
            custom_sources=("a.com", "b.com"),
        )
        assert source_tokens(CspDirective.SCRIPT_SRC, config) == [
            "'self'",
            "'unsafe-inline'",
            "'unsafe-eval'",
            "legacy.com",
            "a.com",
            "b.com",
        ]

    def test_unsafe_keywords_only_where_applicable(self):
        config = CspDirectiveConfig(unsafe_inline=True, unsafe_eval=True)
        assert source_tokens(CspDirective.STYLE_SRC, config) == ["'unsafe-inline'"]
        assert source_tokens(CspDirective.IMG_SRC, config) == []

    def test_none_alone(self):
        assert source_tokens(CspDirective.OBJECT_SRC, CspDirectiveConfig(none=True)) == ["'none'"]

    @pytest.mark.parametrize(
        "config",
        [
            CspDirectiveConfig(none=True, self_src=True),
            CspDirectiveConfig(none=True, custom_sources=("a.com",)),
            CspDirectiveConfig(none=True, source="a.com"),
        ],
    )
    def test_none_with_sources_is_configuration_error(self, config):
        with pytest.raises(HeaderConfigurationException) as exc_info:
            source_tokens(CspDirective.SCRIPT_SRC, config)
        assert exc_info.value.attribute == "script-src.none"
        assert exc_info.value.code == "HEADER_CONFIG"


class TestDirectiveBlock:
    def test_inherited_directive_is_omitted(self):
        assert directive_block(CspDirective.IMG_SRC, CspDirectiveConfig(self_src=True, inherited=True)) is None

    def test_empty_directive_is_omitted(self):
        assert directive_block(CspDirective.IMG_SRC, CspDirectiveConfig()) is None

    def test_sandbox_without_flags(self):
        assert directive_block(CspDirective.SANDBOX, CspSandboxConfig(enabled=True)) == "sandbox;"

    def test_sandbox_flags_in_fixed_order(self):
        config = CspSandboxConfig(enabled=True, flags=frozenset({SandboxFlag.ALLOW_SCRIPTS, SandboxFlag.ALLOW_FORMS}))
        assert directive_block(CspDirective.SANDBOX, config) == "sandbox allow-forms allow-scripts;"

    def test_disabled_sandbox_is_omitted(self):
        config = CspSandboxConfig(enabled=False, flags=frozenset({SandboxFlag.ALLOW_FORMS}))
        assert directive_block(CspDirective.SANDBOX, config) is None

    def test_plugin_types_need_media_types(self):
        assert directive_block(CspDirective.PLUGIN_TYPES, CspPluginTypesConfig(enabled=True)) is None
        config = CspPluginTypesConfig(enabled=True, media_types=("application/pdf",))
        assert directive_block(CspDirective.PLUGIN_TYPES, config) == "plugin-types application/pdf;"

    def test_toggles(self):
        on = CspToggleConfig(enabled=True)
        assert directive_block(CspDirective.BLOCK_ALL_MIXED_CONTENT, on) == "block-all-mixed-content;"
        assert directive_block(CspDirective.UPGRADE_INSECURE_REQUESTS, on) == "upgrade-insecure-requests;"
        assert directive_block(CspDirective.UPGRADE_INSECURE_REQUESTS, CspToggleConfig()) is None

    def test_report_uri_legacy_first(self):
        config = CspReportUriConfig(report_uri="/legacy", report_uris=("/a", "/b"))
        assert directive_block(CspDirective.REPORT_URI, config) == "report-uri /legacy /a /b;"

    def test_empty_report_uri_is_omitted(self):
        assert directive_block(CspDirective.REPORT_URI, CspReportUriConfig()) is None


class TestSerializePolicy:
    def test_empty_policy_is_empty_string(self):
        assert serialize_policy(CspPolicy(enabled=True)) == ""

    def test_all_disabled_is_empty_string(self):
        aggregator = CspPolicyAggregator(_policy(default_src=CspDirectiveConfig(self_src=True)))
        aggregator.set_directive(CspDirective.DEFAULT_SRC, DirectiveOverride.disable())
        assert serialize_policy(aggregator.snapshot()) == ""

    def test_single_directive_has_no_trailing_separator(self):
        assert serialize_policy(_policy(default_src=CspDirectiveConfig(self_src=True))) == "default-src 'self'"

    def test_fixed_directive_order_regardless_of_insertion(self):
        policy = _policy(
            report_uri=CspReportUriConfig(report_uris=("/csp",)),
            img_src=CspDirectiveConfig(custom_sources=("img.example.com",)),
            default_src=CspDirectiveConfig(self_src=True),
            upgrade_insecure_requests=CspToggleConfig(enabled=True),
            script_src=CspDirectiveConfig(self_src=True, unsafe_eval=True),
        )
        assert serialize_policy(policy) == (
            "default-src 'self'; script-src 'self' 'unsafe-eval'; img-src img.example.com; "
            "upgrade-insecure-requests; report-uri /csp"
        )

    def test_trailing_bare_directive(self):
        policy = _policy(
            default_src=CspDirectiveConfig(none=True),
            sandbox=CspSandboxConfig(enabled=True),
        )
        assert serialize_policy(policy) == "default-src 'none'; sandbox"

    def test_appended_sources_serialize_after_base(self):
        base = _policy(script_src=CspDirectiveConfig(self_src=True, custom_sources=("a.com",)))
        aggregator = CspPolicyAggregator(base)
        aggregator.set_directive(
            CspDirective.SCRIPT_SRC,
            DirectiveOverride.append(CspDirectiveConfig(custom_sources=("b.com",))),
        )
        assert serialize_policy(aggregator.snapshot()) == "script-src 'self' a.com b.com"

    def test_appended_legacy_source_serializes_after_base(self):
        aggregator = CspPolicyAggregator(_policy(script_src=CspDirectiveConfig(custom_sources=("a.com",))))
        aggregator.set_directive(CspDirective.SCRIPT_SRC, DirectiveOverride.append(CspDirectiveConfig(source="b.com")))
        assert serialize_policy(aggregator.snapshot()) == "script-src a.com b.com"

    def test_serialization_is_deterministic(self):
        policy = _policy(
            default_src=CspDirectiveConfig(self_src=True),
            sandbox=CspSandboxConfig(enabled=True, flags=frozenset(SandboxFlag)),
            plugin_types=CspPluginTypesConfig(enabled=True, media_types=("application/pdf", "image/png")),
        )
        values = {serialize_policy(policy) for _ in range(20)}
        assert len(values) == 1

    def test_conflict_error_names_the_header(self):
        policy = _policy(object_src=CspDirectiveConfig(none=True, self_src=True))
        with pytest.raises(HeaderConfigurationException, match="^csp_report_only: "):
            serialize_policy(policy, header="csp_report_only")
