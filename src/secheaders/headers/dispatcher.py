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
"""HeaderDispatcher: gate check, resolve, serialize, write."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import structlog

from secheaders.headers.context import MutableHeaderCollection, ResponseHeaderContext
from secheaders.headers.csp.policy import CspPolicyAggregator
from secheaders.headers.csp.serializer import serialize_policy
from secheaders.headers.kinds import (
    CACHE_CONTROL_HEADER,
    CSP_HEADER_NAMES,
    EXPIRES_HEADER,
    PRAGMA_HEADER,
    SERVER_HEADER,
    STRICT_TRANSPORT_SECURITY_HEADER,
    VERSION_HEADERS,
    X_CONTENT_TYPE_OPTIONS_HEADER,
    X_DOWNLOAD_OPTIONS_HEADER,
    X_FRAME_OPTIONS_HEADER,
    X_XSS_PROTECTION_HEADER,
    HeaderKind,
)
from secheaders.headers.overrides import CspEnabledOverride, CspOverride, HeaderConfigOverride
from secheaders.headers.settings import SecurityHeadersSettings
from secheaders.headers.simple import (
    NO_CACHE_CACHE_CONTROL,
    NO_CACHE_EXPIRES,
    NO_CACHE_PRAGMA,
    content_type_options_value,
    download_options_value,
    frame_options_value,
    hsts_value,
    no_cache_applies,
    server_header_value,
    xss_protection_value,
)
from secheaders.kernel.exceptions import ConfigurationException

logger = structlog.get_logger("secheaders.headers")

_SIMPLE_HEADERS: dict[HeaderKind, tuple[str, Callable[[Any], str | None]]] = {
    HeaderKind.HSTS: (STRICT_TRANSPORT_SECURITY_HEADER, hsts_value),
    HeaderKind.X_FRAME_OPTIONS: (X_FRAME_OPTIONS_HEADER, frame_options_value),
    HeaderKind.X_CONTENT_TYPE_OPTIONS: (X_CONTENT_TYPE_OPTIONS_HEADER, content_type_options_value),
    HeaderKind.X_XSS_PROTECTION: (X_XSS_PROTECTION_HEADER, xss_protection_value),
    HeaderKind.X_DOWNLOAD_OPTIONS: (X_DOWNLOAD_OPTIONS_HEADER, download_options_value),
}


class HeaderDispatcher:
    """Single entry point every pipeline stage uses to set security headers.

    The first stage to call :meth:`apply` for a header kind on a response
    decides that header; later calls for the same kind and response do
    nothing, not even override evaluation.

    Args:
        settings: Read-only base configuration shared by all responses.
        strict: Re-raise configuration errors from :meth:`apply_all` instead of
            only logging them. Meant for development and tests.
    """

    def __init__(self, settings: SecurityHeadersSettings | None = None, strict: bool = False) -> None:
        self._settings = settings or SecurityHeadersSettings()
        self._strict = strict

    @property
    def settings(self) -> SecurityHeadersSettings:
        return self._settings

    @property
    def strict(self) -> bool:
        return self._strict

    def apply(self, kind: HeaderKind, context: ResponseHeaderContext, headers: MutableHeaderCollection) -> bool:
        """Decide and write one header kind.

        Returns:
            True if this call claimed the header kind, False if an earlier
            stage already handled it.

        Raises:
            HeaderConfigurationException: The header's configuration is
                invalid. The header is left unwritten.
        """
        kind = HeaderKind(kind)
        if not context.gate.try_claim(kind):
            logger.debug("security_header_already_applied", header=kind.value, path=context.path)
            return False

        if kind in (HeaderKind.CSP, HeaderKind.CSP_REPORT_ONLY):
            self._apply_csp(kind, context, headers)
        elif kind is HeaderKind.SUPPRESS_VERSION_HEADERS:
            self._suppress_version_headers(context, headers)
        elif kind is HeaderKind.NO_CACHE:
            self._apply_no_cache(context, headers)
        else:
            self._apply_simple(kind, context, headers)
        return True

    def apply_all(
        self,
        context: ResponseHeaderContext,
        headers: MutableHeaderCollection,
        kinds: Iterable[HeaderKind] = tuple(HeaderKind),
    ) -> list[ConfigurationException]:
        """Apply every kind in *kinds*, isolating configuration failures.

        A failing header is logged and left unwritten; the others are still
        applied. Returns the failures. In strict mode the first one is
        re-raised once every kind has been attempted.
        """
        failures: list[ConfigurationException] = []
        for kind in kinds:
            try:
                self.apply(kind, context, headers)
            except ConfigurationException as exc:
                logger.error(
                    "security_header_configuration_error",
                    header=HeaderKind(kind).value,
                    path=context.path,
                    error=str(exc),
                    code=exc.code,
                    details=exc.context,
                )
                failures.append(exc)
        if failures and self._strict:
            raise failures[0]
        return failures

    # ------------------------------------------------------------------
    # CSP
    # ------------------------------------------------------------------

    def _apply_csp(self, kind: HeaderKind, context: ResponseHeaderContext, headers: MutableHeaderCollection) -> None:
        report_only = kind is HeaderKind.CSP_REPORT_ONLY
        aggregator = CspPolicyAggregator(self._settings.csp_report_only if report_only else self._settings.csp)

        for override in context.overrides_for(kind):
            if isinstance(override, CspOverride):
                aggregator.set_directive(override.directive, override.override)
            elif isinstance(override, CspEnabledOverride):
                aggregator.set_enabled(override.enabled)

        if not aggregator.is_enabled():
            return

        policy = aggregator.snapshot()
        value = serialize_policy(policy, header=kind.value)
        if not value:
            logger.debug("security_header_empty", header=kind.value, path=context.path)
            return

        primary, legacy, webkit = CSP_HEADER_NAMES[report_only]
        headers[primary] = value
        if policy.x_content_security_policy_header:
            headers[legacy] = value
        if policy.x_webkit_csp_header:
            headers[webkit] = value

    # ------------------------------------------------------------------
    # Single-value headers
    # ------------------------------------------------------------------

    def _effective_config(self, kind: HeaderKind, context: ResponseHeaderContext) -> Any:
        config = self._settings.config_for(kind)
        for override in context.overrides_for(kind):
            if isinstance(override, HeaderConfigOverride):
                config = override.config
        return config

    def _apply_simple(self, kind: HeaderKind, context: ResponseHeaderContext, headers: MutableHeaderCollection) -> None:
        name, compute = _SIMPLE_HEADERS[kind]
        value = compute(self._effective_config(kind, context))
        if value is None:
            return
        headers[name] = value

    def _suppress_version_headers(self, context: ResponseHeaderContext, headers: MutableHeaderCollection) -> None:
        config = self._effective_config(HeaderKind.SUPPRESS_VERSION_HEADERS, context)
        if not config.enabled:
            return
        for name in VERSION_HEADERS:
            if name in headers:
                del headers[name]
        headers[SERVER_HEADER] = server_header_value(config)

    def _apply_no_cache(self, context: ResponseHeaderContext, headers: MutableHeaderCollection) -> None:
        config = self._effective_config(HeaderKind.NO_CACHE, context)
        if not no_cache_applies(config, context.path, context.handler):
            return
        headers[CACHE_CONTROL_HEADER] = NO_CACHE_CACHE_CONTROL
        headers[PRAGMA_HEADER] = NO_CACHE_PRAGMA
        headers[EXPIRES_HEADER] = NO_CACHE_EXPIRES
