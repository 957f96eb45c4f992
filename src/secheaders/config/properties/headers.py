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
"""Security header configuration properties (secheaders.headers.*)."""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

from secheaders.core.config import config_properties
from secheaders.headers.csp.directives import (
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
from secheaders.headers.settings import SecurityHeadersSettings
from secheaders.headers.simple import (
    FrameOptionsConfig,
    HstsConfig,
    SuppressVersionHeadersConfig,
    ToggleHeaderConfig,
    XssProtectionConfig,
)


class CspDirectiveProperties(BaseModel):
    """A source-list directive. ``self`` is accepted as the YAML key."""

    model_config = ConfigDict(populate_by_name=True)

    none: bool = False
    self_src: bool = Field(default=False, alias="self")
    unsafe_inline: bool = False
    unsafe_eval: bool = False
    source: str | None = None
    sources: list[str] = Field(default_factory=list)

    def to_config(self) -> CspDirectiveConfig:
        return CspDirectiveConfig(
            none=self.none,
            self_src=self.self_src,
            unsafe_inline=self.unsafe_inline,
            unsafe_eval=self.unsafe_eval,
            source=self.source,
            custom_sources=tuple(self.sources),
        )


class CspSandboxProperties(BaseModel):
    enabled: bool = False
    flags: list[SandboxFlag] = Field(default_factory=list)

    def to_config(self) -> CspSandboxConfig:
        return CspSandboxConfig(enabled=self.enabled, flags=frozenset(self.flags))


class CspPluginTypesProperties(BaseModel):
    enabled: bool = False
    media_types: list[str] = Field(default_factory=list)

    def to_config(self) -> CspPluginTypesConfig:
        return CspPluginTypesConfig(enabled=self.enabled, media_types=tuple(self.media_types))


class CspReportUriProperties(BaseModel):
    report_uri: str | None = None
    report_uris: list[str] = Field(default_factory=list)

    def to_config(self) -> CspReportUriConfig:
        return CspReportUriConfig(report_uri=self.report_uri, report_uris=tuple(self.report_uris))


class CspProperties(BaseModel):
    """One CSP policy. Directives left unset fall through to ``default-src``."""

    enabled: bool = False
    x_content_security_policy_header: bool = False
    x_webkit_csp_header: bool = False

    default_src: CspDirectiveProperties | None = None
    script_src: CspDirectiveProperties | None = None
    object_src: CspDirectiveProperties | None = None
    style_src: CspDirectiveProperties | None = None
    img_src: CspDirectiveProperties | None = None
    media_src: CspDirectiveProperties | None = None
    frame_src: CspDirectiveProperties | None = None
    font_src: CspDirectiveProperties | None = None
    connect_src: CspDirectiveProperties | None = None
    sandbox: CspSandboxProperties | None = None
    plugin_types: CspPluginTypesProperties | None = None
    block_all_mixed_content: bool = False
    upgrade_insecure_requests: bool = False
    report_uri: CspReportUriProperties | None = None

    def to_policy(self) -> CspPolicy:
        directives: dict[CspDirective, DirectiveValue] = {}
        for directive in CspDirective:
            attr = directive.value.replace("-", "_")
            value = getattr(self, attr)
            if isinstance(value, bool):
                if value:
                    directives[directive] = CspToggleConfig(enabled=True)
            elif value is not None:
                directives[directive] = value.to_config()
        return CspPolicy(
            enabled=self.enabled,
            directives=directives,
            x_content_security_policy_header=self.x_content_security_policy_header,
            x_webkit_csp_header=self.x_webkit_csp_header,
        )


class HstsProperties(BaseModel):
    enabled: bool = True
    max_age: int = Field(default=31536000, ge=0, description="Seconds")
    include_subdomains: bool = True

    def to_config(self) -> HstsConfig:
        return HstsConfig(
            enabled=self.enabled,
            max_age=timedelta(seconds=self.max_age),
            include_subdomains=self.include_subdomains,
        )


class FrameOptionsProperties(BaseModel):
    # Plain str: unknown values must reach header computation and fail there.
    policy: str = "Deny"

    def to_config(self) -> FrameOptionsConfig:
        return FrameOptionsConfig(policy=self.policy)


class XssProtectionProperties(BaseModel):
    policy: str = "FilterDisabled"
    block_mode: bool = False

    def to_config(self) -> XssProtectionConfig:
        return XssProtectionConfig(policy=self.policy, block_mode=self.block_mode)


class ToggleProperties(BaseModel):
    enabled: bool = False

    def to_config(self) -> ToggleHeaderConfig:
        return ToggleHeaderConfig(enabled=self.enabled)


class SuppressVersionHeadersProperties(BaseModel):
    enabled: bool = False
    server_header: str = ""

    def to_config(self) -> SuppressVersionHeadersConfig:
        return SuppressVersionHeadersConfig(enabled=self.enabled, server_header=self.server_header)


@config_properties(prefix="secheaders.headers")
class SecurityHeadersProperties(BaseModel):
    """Typed view of ``secheaders.headers``; see :meth:`to_settings`.

    ``strict`` makes invalid header configuration fail the request instead of
    only dropping that header.
    """

    strict: bool = False
    csp: CspProperties = Field(default_factory=CspProperties)
    csp_report_only: CspProperties = Field(default_factory=CspProperties)
    hsts: HstsProperties = Field(default_factory=HstsProperties)
    x_frame_options: FrameOptionsProperties = Field(default_factory=FrameOptionsProperties)
    x_content_type_options: ToggleProperties = Field(default_factory=lambda: ToggleProperties(enabled=True))
    x_xss_protection: XssProtectionProperties = Field(default_factory=XssProtectionProperties)
    x_download_options: ToggleProperties = Field(default_factory=ToggleProperties)
    suppress_version_headers: SuppressVersionHeadersProperties = Field(
        default_factory=SuppressVersionHeadersProperties
    )
    no_cache: ToggleProperties = Field(default_factory=ToggleProperties)

    def to_settings(self) -> SecurityHeadersSettings:
        return SecurityHeadersSettings(
            csp=self.csp.to_policy(),
            csp_report_only=self.csp_report_only.to_policy(),
            hsts=self.hsts.to_config(),
            x_frame_options=self.x_frame_options.to_config(),
            x_content_type_options=self.x_content_type_options.to_config(),
            x_xss_protection=self.x_xss_protection.to_config(),
            x_download_options=self.x_download_options.to_config(),
            suppress_version_headers=self.suppress_version_headers.to_config(),
            no_cache=self.no_cache.to_config(),
        )
