"""Exception hierarchy for secheaders.

All library exceptions inherit from SecHeadersException, so callers can
catch one base type or target a specific failure.

Categories:
- ConfigurationException: invalid or inconsistent configuration values
- HeaderConfigurationException: a single header could not be computed
  from its configuration
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class SecHeadersException(Exception):
    """Base exception for all secheaders errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "HEADER_CONFIG").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(SecHeadersException):
    """Configuration values are missing, malformed, or contradict each other."""


class HeaderConfigurationException(ConfigurationException):
    """A response header cannot be computed from its configuration.

    The message is prefixed with the header name so the failing header is
    obvious in logs and tracebacks.

    Args:
        header: Header kind or header name whose computation failed.
        attribute: Configuration attribute that triggered the failure.
        message: Description of the problem.
    """

    def __init__(self, header: str, attribute: str, message: str) -> None:
        super().__init__(
            f"{header}: {message}",
            code="HEADER_CONFIG",
            context={"header": header, "attribute": attribute},
        )
        self.header = header
        self.attribute = attribute
