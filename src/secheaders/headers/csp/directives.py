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
"""CSP directive kinds and their immutable configuration values.

Every value type exposes the same small surface used by the override
resolver and the serializer:

- ``empty(inherited=...)`` builds the "not configured" value,
- ``merged_with(other)`` implements the append override,
- ``inherited`` marks a directive that falls through to ``default-src``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol, TypeVar, runtime_checkable

_V = TypeVar("_V", bound="DirectiveValue")


class CspDirective(StrEnum):
    """Closed set of CSP directives, declared in serialization order."""

    DEFAULT_SRC = "default-src"
    SCRIPT_SRC = "script-src"
    OBJECT_SRC = "object-src"
    STYLE_SRC = "style-src"
    IMG_SRC = "img-src"
    MEDIA_SRC = "media-src"
    FRAME_SRC = "frame-src"
    FONT_SRC = "font-src"
    CONNECT_SRC = "connect-src"
    SANDBOX = "sandbox"
    PLUGIN_TYPES = "plugin-types"
    BLOCK_ALL_MIXED_CONTENT = "block-all-mixed-content"
    UPGRADE_INSECURE_REQUESTS = "upgrade-insecure-requests"
    REPORT_URI = "report-uri"


DIRECTIVE_ORDER: tuple[CspDirective, ...] = tuple(CspDirective)

SOURCE_LIST_DIRECTIVES: frozenset[CspDirective] = frozenset(
    {
        CspDirective.DEFAULT_SRC,
        CspDirective.SCRIPT_SRC,
        CspDirective.OBJECT_SRC,
        CspDirective.STYLE_SRC,
        CspDirective.IMG_SRC,
        CspDirective.MEDIA_SRC,
        CspDirective.FRAME_SRC,
        CspDirective.FONT_SRC,
        CspDirective.CONNECT_SRC,
    }
)

UNSAFE_INLINE_DIRECTIVES: frozenset[CspDirective] = frozenset({CspDirective.SCRIPT_SRC, CspDirective.STYLE_SRC})
UNSAFE_EVAL_DIRECTIVES: frozenset[CspDirective] = frozenset({CspDirective.SCRIPT_SRC})


class SandboxFlag(StrEnum):
    """Sandbox allowances, declared in serialization order."""

    ALLOW_FORMS = "allow-forms"
    ALLOW_MODALS = "allow-modals"
    ALLOW_ORIENTATION_LOCK = "allow-orientation-lock"
    ALLOW_POINTER_LOCK = "allow-pointer-lock"
    ALLOW_POPUPS = "allow-popups"
    ALLOW_POPUPS_TO_ESCAPE_SANDBOX = "allow-popups-to-escape-sandbox"
    ALLOW_PRESENTATION = "allow-presentation"
    ALLOW_SAME_ORIGIN = "allow-same-origin"
    ALLOW_SCRIPTS = "allow-scripts"
    ALLOW_TOP_NAVIGATION = "allow-top-navigation"


@runtime_checkable
class DirectiveValue(Protocol):
    """Structural type shared by all directive configuration values."""

    inherited: bool

    def merged_with(self: _V, other: _V) -> _V: ...


@dataclass(frozen=True)
class CspDirectiveConfig:
    """Configuration of one source-list directive (``script-src`` etc.).

    ``source`` is the historical single-source field; it serializes before
    ``custom_sources``. Duplicate sources are kept as given.
    """

    none: bool = False
    self_src: bool = False
    unsafe_inline: bool = False
    unsafe_eval: bool = False
    source: str | None = None
    custom_sources: tuple[str, ...] = ()
    inherited: bool = False

    def __post_init__(self) -> None:
        # Accept any iterable (lists from config) but store a tuple.
        object.__setattr__(self, "custom_sources", tuple(self.custom_sources))

    @classmethod
    def empty(cls, inherited: bool = False) -> CspDirectiveConfig:
        return cls(inherited=inherited)

    @property
    def has_sources(self) -> bool:
        """True when anything other than ``'none'`` is configured."""
        return bool(self.self_src or self.unsafe_inline or self.unsafe_eval or self.source or self.custom_sources)

    def merged_with(self, other: CspDirectiveConfig) -> CspDirectiveConfig:
        """Flags are OR-ed; sources are this directive's followed by *other*'s.

        Only this directive's scalar ``source`` stays scalar. *other*'s goes
        into the list ahead of its custom sources, so it serializes after
        everything this directive already had.
        """
        appended = ((other.source,) if other.source else ()) + other.custom_sources
        return CspDirectiveConfig(
            none=self.none or other.none,
            self_src=self.self_src or other.self_src,
            unsafe_inline=self.unsafe_inline or other.unsafe_inline,
            unsafe_eval=self.unsafe_eval or other.unsafe_eval,
            source=self.source,
            custom_sources=self.custom_sources + appended,
            inherited=False,
        )


@dataclass(frozen=True)
class CspSandboxConfig:
    """The ``sandbox`` directive: emitted bare when enabled without flags."""

    enabled: bool = False
    flags: frozenset[SandboxFlag] = field(default_factory=frozenset)
    inherited: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", frozenset(SandboxFlag(f) for f in self.flags))

    @classmethod
    def empty(cls, inherited: bool = False) -> CspSandboxConfig:
        return cls(inherited=inherited)

    def merged_with(self, other: CspSandboxConfig) -> CspSandboxConfig:
        return CspSandboxConfig(
            enabled=self.enabled or other.enabled,
            flags=self.flags | other.flags,
        )


@dataclass(frozen=True)
class CspPluginTypesConfig:
    """The ``plugin-types`` directive: an ordered list of MIME types."""

    enabled: bool = False
    media_types: tuple[str, ...] = ()
    inherited: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "media_types", tuple(self.media_types))

    @classmethod
    def empty(cls, inherited: bool = False) -> CspPluginTypesConfig:
        return cls(inherited=inherited)

    def merged_with(self, other: CspPluginTypesConfig) -> CspPluginTypesConfig:
        return CspPluginTypesConfig(
            enabled=self.enabled or other.enabled,
            media_types=self.media_types + other.media_types,
        )


@dataclass(frozen=True)
class CspToggleConfig:
    """Value-less directives: ``block-all-mixed-content``, ``upgrade-insecure-requests``."""

    enabled: bool = False
    inherited: bool = False

    @classmethod
    def empty(cls, inherited: bool = False) -> CspToggleConfig:
        return cls(inherited=inherited)

    def merged_with(self, other: CspToggleConfig) -> CspToggleConfig:
        return CspToggleConfig(enabled=self.enabled or other.enabled)


@dataclass(frozen=True)
class CspReportUriConfig:
    """The ``report-uri`` directive. No URIs means the directive is absent."""

    report_uri: str | None = None
    report_uris: tuple[str, ...] = ()
    inherited: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "report_uris", tuple(self.report_uris))

    @classmethod
    def empty(cls, inherited: bool = False) -> CspReportUriConfig:
        return cls(inherited=inherited)

    def merged_with(self, other: CspReportUriConfig) -> CspReportUriConfig:
        appended = ((other.report_uri,) if self.report_uri and other.report_uri else ()) + other.report_uris
        return CspReportUriConfig(
            report_uri=self.report_uri or other.report_uri,
            report_uris=self.report_uris + appended,
        )


DIRECTIVE_VALUE_TYPES: dict[CspDirective, type] = {
    **{d: CspDirectiveConfig for d in SOURCE_LIST_DIRECTIVES},
    CspDirective.SANDBOX: CspSandboxConfig,
    CspDirective.PLUGIN_TYPES: CspPluginTypesConfig,
    CspDirective.BLOCK_ALL_MIXED_CONTENT: CspToggleConfig,
    CspDirective.UPGRADE_INSECURE_REQUESTS: CspToggleConfig,
    CspDirective.REPORT_URI: CspReportUriConfig,
}


def empty_value(directive: CspDirective, inherited: bool = False) -> DirectiveValue:
    """The "not configured" value for *directive*."""
    return DIRECTIVE_VALUE_TYPES[directive].empty(inherited=inherited)  # type: ignore[no-any-return]


def with_inherited(value: _V, inherited: bool) -> _V:
    """Copy of *value* with its ``inherited`` flag set."""
    if value.inherited == inherited:
        return value
    return dataclasses.replace(value, inherited=inherited)  # type: ignore[type-var]
