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
"""secheaders: layered HTTP security response headers for ASGI applications."""

from secheaders.headers import (
    CspEnabledOverride,
    CspOverride,
    HeaderConfigOverride,
    HeaderDispatcher,
    HeaderKind,
    ResponseHeaderContext,
    ResponseHeaderGate,
    SecurityHeadersSettings,
)
from secheaders.headers.csp import CspDirective, CspDirectiveConfig, CspPolicy, DirectiveOverride

__version__ = "0.1.0"

__all__ = [
    "CspDirective",
    "CspDirectiveConfig",
    "CspEnabledOverride",
    "CspOverride",
    "CspPolicy",
    "DirectiveOverride",
    "HeaderConfigOverride",
    "HeaderDispatcher",
    "HeaderKind",
    "ResponseHeaderContext",
    "ResponseHeaderGate",
    "SecurityHeadersSettings",
    "__version__",
]
