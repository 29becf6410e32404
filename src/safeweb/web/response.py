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
"""Response-side value types shared by interceptors and adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Result:
    """Outcome of an interceptor hook.

    ``is_written`` is ``True`` when the hook already produced the response
    and the pipeline must stop.
    """

    is_written: bool = False

    @classmethod
    def not_written(cls) -> Result:
        return cls(is_written=False)

    @classmethod
    def written(cls) -> Result:
        return cls(is_written=True)


@dataclass
class TemplateResponse:
    """A response rendered from a template after interceptors have run.

    ``func_map`` is the name → function mapping made available to the
    template at render time; interceptors may add entries to it.
    """

    template: str
    data: Any = None
    func_map: dict[str, Callable[..., Any]] = field(default_factory=dict)
