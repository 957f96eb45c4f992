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
"""structlog setup for the ``secheaders`` loggers."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from secheaders.config.properties.logging import LoggingProperties
from secheaders.core.config import Config

PACKAGE_LOGGER = "secheaders"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
]


class StructlogAdapter:
    """Configures structlog from ``secheaders.logging``.

    Levels are set on the ``secheaders`` logger tree, never on the process
    root logger, so the host application's handlers stay in charge of
    where records go. The ``root`` key of ``level`` names that tree.
    """

    def __init__(self) -> None:
        self._properties = LoggingProperties()

    @property
    def properties(self) -> LoggingProperties:
        return self._properties

    def configure(self, config: Config) -> None:
        self._properties = config.bind(LoggingProperties)
        structlog.configure(
            processors=[*_SHARED_PROCESSORS, self._renderer()],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
        )
        for name, level in self._properties.level.items():
            self.set_level(PACKAGE_LOGGER if name == "root" else name, str(level))

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        levels = logging.getLevelNamesMapping()
        logging.getLogger(name).setLevel(levels.get(level.upper(), logging.INFO))

    def _renderer(self) -> structlog.types.Processor:
        if self._properties.format.lower() == "json":
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer(colors=False)
