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
"""LoggingPort — how an application wires safeweb's log output.

safeweb modules log through ``logging.getLogger(__name__)``; the Starlette
filter emits structured events on ``structlog.get_logger("safeweb.web")``.
An adapter decides levels and rendering for both.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from safeweb.config.properties.logging import LoggingProperties
from safeweb.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Logging configuration contract."""

    def configure(self, config: Config) -> None: ...
    def apply(self, props: LoggingProperties) -> None: ...
    def get_logger(self, name: str) -> Any: ...
