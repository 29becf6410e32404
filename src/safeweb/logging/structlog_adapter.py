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
"""StructlogAdapter — renders safeweb's log output with structlog.

Event fields that could carry XSRF proof material (tokens, cookie values, the
secret key) are masked before rendering; see :func:`redact_fields`.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from safeweb.config.properties.logging import LoggingProperties
from safeweb.core.config import Config

REDACTED = "[redacted]"

_RENDERERS = {
    "console": structlog.dev.ConsoleRenderer,
    "json": structlog.processors.JSONRenderer,
}


def redact_fields(names: Iterable[str]) -> Processor:
    """Return a processor that masks the values of *names* in each event."""
    masked = frozenset(names)

    def _redact(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for name in masked.intersection(event_dict):
            event_dict[name] = REDACTED
        return event_dict

    return _redact


class StructlogAdapter:
    """Configures structlog and stdlib logging from :class:`LoggingProperties`."""

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}
        self._redact: list[str] = []

    def configure(self, config: Config) -> None:
        """Bind ``safeweb.logging`` from *config* and apply it."""
        self.apply(config.bind(LoggingProperties))

    def apply(self, props: LoggingProperties) -> None:
        levels = {name: str(level).upper() for name, level in props.level.items()}
        self._root_level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = str(props.format).lower()
        if self._format not in _RENDERERS:
            raise ValueError(f"Unknown log format {props.format!r}; expected one of {sorted(_RENDERERS)}")
        self._redact = list(props.redact)

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                redact_fields(self._redact),
                structlog.processors.format_exc_info,
                _RENDERERS[self._format](),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )
        for name, level in self._module_levels.items():
            logging.getLogger(name).setLevel(getattr(logging, level, logging.INFO))

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)
