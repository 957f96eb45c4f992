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
"""Immutable, process-wide base configuration for every header kind."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from secheaders.headers.csp.policy import CspPolicy
from secheaders.headers.kinds import HeaderKind
from secheaders.headers.simple import (
    FrameOptionsConfig,
    HstsConfig,
    SuppressVersionHeadersConfig,
    ToggleHeaderConfig,
    XssProtectionConfig,
)


@dataclass(frozen=True)
class SecurityHeadersSettings:
    """Base configuration for all security headers.

    Field names match :class:`HeaderKind` values. Built once at startup and
    shared read-only by every response.
    """

    csp: CspPolicy = field(default_factory=CspPolicy)
    csp_report_only: CspPolicy = field(default_factory=CspPolicy)
    hsts: HstsConfig = field(default_factory=HstsConfig)
    x_frame_options: FrameOptionsConfig = field(default_factory=FrameOptionsConfig)
    x_content_type_options: ToggleHeaderConfig = field(default_factory=lambda: ToggleHeaderConfig(enabled=True))
    x_xss_protection: XssProtectionConfig = field(default_factory=XssProtectionConfig)
    x_download_options: ToggleHeaderConfig = field(default_factory=ToggleHeaderConfig)
    suppress_version_headers: SuppressVersionHeadersConfig = field(default_factory=SuppressVersionHeadersConfig)
    no_cache: ToggleHeaderConfig = field(default_factory=ToggleHeaderConfig)

    def config_for(self, kind: HeaderKind) -> Any:
        return getattr(self, HeaderKind(kind).value)


# Configuration type each single-value header kind accepts in an override.
HEADER_CONFIG_TYPES: dict[HeaderKind, type] = {
    HeaderKind.HSTS: HstsConfig,
    HeaderKind.X_FRAME_OPTIONS: FrameOptionsConfig,
    HeaderKind.X_CONTENT_TYPE_OPTIONS: ToggleHeaderConfig,
    HeaderKind.X_XSS_PROTECTION: XssProtectionConfig,
    HeaderKind.X_DOWNLOAD_OPTIONS: ToggleHeaderConfig,
    HeaderKind.SUPPRESS_VERSION_HEADERS: SuppressVersionHeadersConfig,
    HeaderKind.NO_CACHE: ToggleHeaderConfig,
}
