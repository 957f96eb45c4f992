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
"""Single-value security headers.

These headers have no merge step: each value is a pure function of one
configuration object. ``None`` means "do not write the header".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from typing import TypeVar

from secheaders.headers.kinds import HeaderKind
from secheaders.kernel.exceptions import HeaderConfigurationException

DEFAULT_SERVER_HEADER = "Webserver 1.0"

NO_CACHE_CACHE_CONTROL = "no-cache, no-store, must-revalidate"
NO_CACHE_PRAGMA = "no-cache"
NO_CACHE_EXPIRES = "-1"

# Responses for these never get no-cache headers.
NO_CACHE_EXCLUDED_PATH_SUFFIXES: tuple[str, ...] = ("ScriptResource.axd", "WebResource.axd")
NO_CACHE_EXCLUDED_HANDLER = "starlette.staticfiles.StaticFiles"

E = TypeVar("E", bound=StrEnum)


class FrameOptionsPolicy(StrEnum):
    DISABLED = "Disabled"
    DENY = "Deny"
    SAME_ORIGIN = "SameOrigin"


class XssProtectionPolicy(StrEnum):
    DISABLED = "Disabled"
    FILTER_DISABLED = "FilterDisabled"
    FILTER_ENABLED = "FilterEnabled"


@dataclass(frozen=True)
class HstsConfig:
    enabled: bool = True
    max_age: timedelta = timedelta(days=365)
    include_subdomains: bool = True


@dataclass(frozen=True)
class FrameOptionsConfig:
    policy: FrameOptionsPolicy | str = FrameOptionsPolicy.DENY


@dataclass(frozen=True)
class XssProtectionConfig:
    policy: XssProtectionPolicy | str = XssProtectionPolicy.FILTER_DISABLED
    block_mode: bool = False


@dataclass(frozen=True)
class ToggleHeaderConfig:
    """On/off switch for headers with a fixed value."""

    enabled: bool = False


@dataclass(frozen=True)
class SuppressVersionHeadersConfig:
    enabled: bool = False
    server_header: str = ""


def hsts_value(config: HstsConfig) -> str | None:
    """``max-age=<seconds>[; includeSubDomains]``; a zero max-age disables the header."""
    seconds = int(config.max_age.total_seconds())
    if not config.enabled or seconds == 0:
        return None
    suffix = "; includeSubDomains" if config.include_subdomains else ""
    return f"max-age={seconds}{suffix}"


def frame_options_value(config: FrameOptionsConfig) -> str | None:
    policy = _coerce(FrameOptionsPolicy, config.policy, HeaderKind.X_FRAME_OPTIONS)
    if policy is FrameOptionsPolicy.DISABLED:
        return None
    return policy.value


def xss_protection_value(config: XssProtectionConfig) -> str | None:
    policy = _coerce(XssProtectionPolicy, config.policy, HeaderKind.X_XSS_PROTECTION)
    if policy is XssProtectionPolicy.DISABLED:
        return None
    if policy is XssProtectionPolicy.FILTER_DISABLED:
        return "0"
    return "1; mode=block" if config.block_mode else "1"


def content_type_options_value(config: ToggleHeaderConfig) -> str | None:
    return "nosniff" if config.enabled else None


def download_options_value(config: ToggleHeaderConfig) -> str | None:
    return "noopen" if config.enabled else None


def server_header_value(config: SuppressVersionHeadersConfig) -> str:
    return config.server_header or DEFAULT_SERVER_HEADER


def no_cache_applies(config: ToggleHeaderConfig, path: str, handler: str | None) -> bool:
    """Whether no-cache headers belong on a response for *path* served by *handler*."""
    if not config.enabled or handler is None:
        return False
    if handler == NO_CACHE_EXCLUDED_HANDLER:
        return False
    return not path.endswith(NO_CACHE_EXCLUDED_PATH_SUFFIXES)


def _coerce(enum_cls: type[E], value: E | str, kind: HeaderKind) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise HeaderConfigurationException(
            kind.value,
            "policy",
            f"unrecognized {enum_cls.__name__} value {value!r}",
        ) from None
