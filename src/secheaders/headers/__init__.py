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
"""Security response headers: models, override resolution, and dispatch."""

from secheaders.headers.context import MutableHeaderCollection, ResponseHeaderContext
from secheaders.headers.dispatcher import HeaderDispatcher
from secheaders.headers.gate import ResponseHeaderGate
from secheaders.headers.kinds import HeaderKind
from secheaders.headers.overrides import CspEnabledOverride, CspOverride, HeaderConfigOverride, HeaderOverride
from secheaders.headers.settings import SecurityHeadersSettings
from secheaders.headers.simple import (
    FrameOptionsConfig,
    FrameOptionsPolicy,
    HstsConfig,
    SuppressVersionHeadersConfig,
    ToggleHeaderConfig,
    XssProtectionConfig,
    XssProtectionPolicy,
)

__all__ = [
    "CspEnabledOverride",
    "CspOverride",
    "FrameOptionsConfig",
    "FrameOptionsPolicy",
    "HeaderConfigOverride",
    "HeaderDispatcher",
    "HeaderKind",
    "HeaderOverride",
    "HstsConfig",
    "MutableHeaderCollection",
    "ResponseHeaderContext",
    "ResponseHeaderGate",
    "SecurityHeadersSettings",
    "SuppressVersionHeadersConfig",
    "ToggleHeaderConfig",
    "XssProtectionConfig",
    "XssProtectionPolicy",
]
