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
"""Header kinds handled by the dispatcher and the wire names they map to."""

from __future__ import annotations

from enum import StrEnum


class HeaderKind(StrEnum):
    """One logical header decision per response.

    A kind may write several wire headers (CSP plus its legacy mirrors) or
    none at all; the gate tracks kinds, not wire names.
    """

    CSP = "csp"
    CSP_REPORT_ONLY = "csp_report_only"
    HSTS = "hsts"
    X_FRAME_OPTIONS = "x_frame_options"
    X_CONTENT_TYPE_OPTIONS = "x_content_type_options"
    X_XSS_PROTECTION = "x_xss_protection"
    X_DOWNLOAD_OPTIONS = "x_download_options"
    SUPPRESS_VERSION_HEADERS = "suppress_version_headers"
    NO_CACHE = "no_cache"


CONTENT_SECURITY_POLICY_HEADER = "Content-Security-Policy"
CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER = "Content-Security-Policy-Report-Only"
X_CONTENT_SECURITY_POLICY_HEADER = "X-Content-Security-Policy"
X_CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER = "X-Content-Security-Policy-Report-Only"
X_WEBKIT_CSP_HEADER = "X-WebKit-CSP"
X_WEBKIT_CSP_REPORT_ONLY_HEADER = "X-WebKit-CSP-Report-Only"

STRICT_TRANSPORT_SECURITY_HEADER = "Strict-Transport-Security"
X_FRAME_OPTIONS_HEADER = "X-Frame-Options"
X_CONTENT_TYPE_OPTIONS_HEADER = "X-Content-Type-Options"
X_XSS_PROTECTION_HEADER = "X-XSS-Protection"
X_DOWNLOAD_OPTIONS_HEADER = "X-Download-Options"

SERVER_HEADER = "Server"
CACHE_CONTROL_HEADER = "Cache-Control"
PRAGMA_HEADER = "Pragma"
EXPIRES_HEADER = "Expires"

VERSION_HEADERS: tuple[str, ...] = (
    "X-Powered-By",
    "X-AspNet-Version",
    "X-AspNetMvc-Version",
)

# (primary, legacy X-Content-Security-Policy, legacy X-WebKit-CSP)
CSP_HEADER_NAMES: dict[bool, tuple[str, str, str]] = {
    False: (CONTENT_SECURITY_POLICY_HEADER, X_CONTENT_SECURITY_POLICY_HEADER, X_WEBKIT_CSP_HEADER),
    True: (
        CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER,
        X_CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER,
        X_WEBKIT_CSP_REPORT_ONLY_HEADER,
    ),
}
