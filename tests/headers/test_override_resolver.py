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
"""Tests for directive override resolution."""

from __future__ import annotations

import pytest

from secheaders.headers.csp.directives import (
    CspDirective,
    CspDirectiveConfig,
    CspSandboxConfig,
    CspToggleConfig,
    SandboxFlag,
)
from secheaders.headers.csp.overrides import (
    DirectiveOverride,
    OverrideMode,
    resolve_directive,
    resolve_overrides,
)
from secheaders.headers.csp.serializer import source_tokens
from secheaders.kernel.exceptions import ConfigurationException

SCRIPT = CspDirective.SCRIPT_SRC


def _sources(*sources: str) -> CspDirectiveConfig:
    return CspDirectiveConfig(custom_sources=sources)


class TestDirectiveOverride:
    def test_constructors_set_mode(self):
        assert DirectiveOverride.disable().mode is OverrideMode.DISABLE
        assert DirectiveOverride.replace(_sources("a")).mode is OverrideMode.REPLACE
        assert DirectiveOverride.append(_sources("a")).mode is OverrideMode.APPEND

    def test_replace_requires_config(self):
        with pytest.raises(ConfigurationException):
            DirectiveOverride(OverrideMode.REPLACE)

    def test_mismatched_config_type_rejected(self):
        override = DirectiveOverride.append(CspSandboxConfig(enabled=True))
        with pytest.raises(ConfigurationException, match="script-src"):
            override.check_target(SCRIPT)


class TestResolveDirective:
    def test_no_override_passes_base_through(self):
        base = CspDirectiveConfig(self_src=True)
        assert resolve_directive(SCRIPT, base, None) is base

    def test_no_override_and_no_base_is_inherited(self):
        result = resolve_directive(SCRIPT, None, None)
        assert result.inherited
        assert result == CspDirectiveConfig(inherited=True)

    def test_disable_yields_empty_non_inherited(self):
        base = CspDirectiveConfig(self_src=True, custom_sources=("a.com",))
        result = resolve_directive(SCRIPT, base, DirectiveOverride.disable())
        assert result == CspDirectiveConfig()
        assert not result.inherited

    def test_replace_yields_override_config(self):
        base = CspDirectiveConfig(self_src=True, custom_sources=("a.com",))
        replacement = CspDirectiveConfig(custom_sources=("b.com",), inherited=True)
        result = resolve_directive(SCRIPT, base, DirectiveOverride.replace(replacement))
        assert result == CspDirectiveConfig(custom_sources=("b.com",))

    def test_append_merges_with_base(self):
        base = CspDirectiveConfig(self_src=True, custom_sources=("a.com",))
        result = resolve_directive(SCRIPT, base, DirectiveOverride.append(_sources("b.com")))
        assert result == CspDirectiveConfig(self_src=True, custom_sources=("a.com", "b.com"))
        assert source_tokens(SCRIPT, result) == ["'self'", "a.com", "b.com"]

    def test_append_onto_absent_base(self):
        result = resolve_directive(SCRIPT, None, DirectiveOverride.append(_sources("b.com")))
        assert result == CspDirectiveConfig(custom_sources=("b.com",))

    def test_append_ors_flags_from_either_side(self):
        base = CspDirectiveConfig(unsafe_inline=True)
        result = resolve_directive(SCRIPT, base, DirectiveOverride.append(CspDirectiveConfig(unsafe_eval=True)))
        assert result.unsafe_inline
        assert result.unsafe_eval

    def test_special_directive_append(self):
        base = CspSandboxConfig(enabled=True, flags=frozenset({SandboxFlag.ALLOW_FORMS}))
        result = resolve_directive(
            CspDirective.SANDBOX,
            base,
            DirectiveOverride.append(CspSandboxConfig(flags=frozenset({SandboxFlag.ALLOW_POPUPS}))),
        )
        assert result.flags == {SandboxFlag.ALLOW_FORMS, SandboxFlag.ALLOW_POPUPS}

    def test_special_directive_disable(self):
        result = resolve_directive(
            CspDirective.UPGRADE_INSECURE_REQUESTS,
            CspToggleConfig(enabled=True),
            DirectiveOverride.disable(),
        )
        assert result == CspToggleConfig()


class TestResolveOverrides:
    def test_empty_sequence_behaves_like_no_override(self):
        assert resolve_overrides(SCRIPT, None, []).inherited

    def test_append_then_replace(self):
        overrides = [DirectiveOverride.append(_sources("a")), DirectiveOverride.replace(_sources("b"))]
        result = resolve_overrides(SCRIPT, None, overrides)
        assert source_tokens(SCRIPT, result) == ["b"]

    def test_replace_then_append(self):
        overrides = [DirectiveOverride.replace(_sources("b")), DirectiveOverride.append(_sources("a"))]
        result = resolve_overrides(SCRIPT, None, overrides)
        assert source_tokens(SCRIPT, result) == ["b", "a"]

    def test_folding_equals_stepwise_application(self):
        base = CspDirectiveConfig(self_src=True)
        first = DirectiveOverride.append(_sources("a"))
        second = DirectiveOverride.append(_sources("b"))
        third = DirectiveOverride.replace(_sources("c"))

        stepwise = resolve_directive(SCRIPT, resolve_directive(SCRIPT, base, first), second)
        stepwise = resolve_directive(SCRIPT, stepwise, third)
        assert resolve_overrides(SCRIPT, base, [first, second, third]) == stepwise

    def test_disable_then_append_restarts_from_empty(self):
        base = CspDirectiveConfig(self_src=True)
        result = resolve_overrides(SCRIPT, base, [DirectiveOverride.disable(), DirectiveOverride.append(_sources("x"))])
        assert result == CspDirectiveConfig(custom_sources=("x",))

    def test_base_is_not_mutated(self):
        base = CspDirectiveConfig(custom_sources=("a",))
        resolve_overrides(SCRIPT, base, [DirectiveOverride.append(_sources("b"))])
        assert base.custom_sources == ("a",)
