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
"""Tests for binding ``secheaders.headers`` configuration to header settings."""

from __future__ import annotations

from datetime import timedelta

import pytest

from secheaders.config.properties import SecurityHeadersProperties
from secheaders.core.config import Config
from secheaders.headers.csp.directives import (
    CspDirective,
    CspDirectiveConfig,
    CspReportUriConfig,
    CspSandboxConfig,
    CspToggleConfig,
    SandboxFlag,
)
from secheaders.headers.csp.serializer import serialize_policy
from secheaders.headers.simple import FrameOptionsConfig, ToggleHeaderConfig, frame_options_value
from secheaders.kernel.exceptions import ConfigurationException, HeaderConfigurationException

CSP_YAML = """
secheaders:
  headers:
    csp:
      enabled: true
      x_webkit_csp_header: true
      default_src:
        self: true
      script_src:
        self: true
        unsafe_eval: true
        sources: [cdn.example.com]
      sandbox:
        enabled: true
        flags: [allow-scripts, allow-forms]
      upgrade_insecure_requests: true
      report_uri:
        report_uris: [/csp-report]
"""


def _settings(config: Config):
    return config.bind(SecurityHeadersProperties).to_settings()


class TestDefaults:
    def test_packaged_defaults(self):
        settings = _settings(Config.with_defaults())
        assert settings.csp.enabled is False
        assert settings.hsts.max_age == timedelta(days=365)
        assert settings.x_frame_options == FrameOptionsConfig("Deny")
        assert settings.x_content_type_options == ToggleHeaderConfig(enabled=True)
        assert settings.no_cache.enabled is False

    def test_empty_config_matches_packaged_defaults(self):
        assert _settings(Config({})) == _settings(Config.with_defaults())


class TestCspBinding:
    @pytest.fixture
    def settings(self, tmp_path):
        path = tmp_path / "secheaders.yaml"
        path.write_text(CSP_YAML)
        return _settings(Config.from_file(path))

    def test_directive_values(self, settings):
        csp = settings.csp
        assert csp.enabled is True
        assert csp.x_webkit_csp_header is True
        assert csp.directive(CspDirective.DEFAULT_SRC) == CspDirectiveConfig(self_src=True)
        assert csp.directive(CspDirective.SCRIPT_SRC) == CspDirectiveConfig(
            self_src=True, unsafe_eval=True, custom_sources=("cdn.example.com",)
        )
        assert csp.directive(CspDirective.SANDBOX) == CspSandboxConfig(
            enabled=True, flags=frozenset({SandboxFlag.ALLOW_SCRIPTS, SandboxFlag.ALLOW_FORMS})
        )
        assert csp.directive(CspDirective.UPGRADE_INSECURE_REQUESTS) == CspToggleConfig(enabled=True)
        assert csp.directive(CspDirective.REPORT_URI) == CspReportUriConfig(report_uris=("/csp-report",))

    def test_unset_directives_absent(self, settings):
        assert settings.csp.directive(CspDirective.IMG_SRC) is None
        assert settings.csp.directive(CspDirective.BLOCK_ALL_MIXED_CONTENT) is None

    def test_serializes(self, settings):
        assert serialize_policy(settings.csp) == (
            "default-src 'self'; script-src 'self' 'unsafe-eval' cdn.example.com; "
            "sandbox allow-forms allow-scripts; upgrade-insecure-requests; report-uri /csp-report"
        )

    def test_report_only_policy_is_independent(self, settings):
        assert settings.csp_report_only.enabled is False
        assert settings.csp_report_only.directives == {}

    def test_python_field_name_also_accepted(self):
        config = Config({"secheaders": {"headers": {"csp": {"default_src": {"self_src": True}}}}})
        assert _settings(config).csp.directive(CspDirective.DEFAULT_SRC).self_src is True


class TestSimpleHeaderBinding:
    def test_placeholder_resolved_when_binding(self, monkeypatch):
        monkeypatch.setenv("XFO_POLICY", "SameOrigin")
        config = Config({"secheaders": {"headers": {"x_frame_options": {"policy": "${XFO_POLICY}"}}}})
        assert _settings(config).x_frame_options.policy == "SameOrigin"

    def test_env_override_reaches_settings(self, monkeypatch):
        monkeypatch.setenv("SECHEADERS_HEADERS_NO_CACHE_ENABLED", "true")
        monkeypatch.setenv("SECHEADERS_HEADERS_HSTS_MAX_AGE", "0")
        settings = _settings(Config.with_defaults())
        assert settings.no_cache.enabled is True
        assert settings.hsts.max_age == timedelta(0)

    def test_hsts_seconds(self):
        config = Config.with_defaults({"secheaders": {"headers": {"hsts": {"max_age": 3600}}}})
        assert _settings(config).hsts.max_age == timedelta(hours=1)

    def test_negative_hsts_rejected(self):
        config = Config({"secheaders": {"headers": {"hsts": {"max_age": -1}}}})
        with pytest.raises(ConfigurationException) as exc_info:
            config.bind(SecurityHeadersProperties)
        assert exc_info.value.code == "CONFIG_VALIDATION"

    def test_unknown_frame_option_fails_at_header_computation(self):
        config = Config({"secheaders": {"headers": {"x_frame_options": {"policy": "Sideways"}}}})
        settings = _settings(config)
        assert settings.x_frame_options.policy == "Sideways"
        with pytest.raises(HeaderConfigurationException):
            frame_options_value(settings.x_frame_options)

    def test_unknown_sandbox_flag_rejected(self):
        config = Config({"secheaders": {"headers": {"csp": {"sandbox": {"enabled": True, "flags": ["allow-all"]}}}}})
        with pytest.raises(ConfigurationException):
            config.bind(SecurityHeadersProperties)
