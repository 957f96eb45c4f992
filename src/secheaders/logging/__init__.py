"""secheaders logging: logging port and structlog adapter."""

from secheaders.logging.port import LoggingPort
from secheaders.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
