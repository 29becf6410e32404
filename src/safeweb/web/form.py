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
"""Form — parsed form fields with typed accessors."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from safeweb.kernel.exceptions import InvalidRequestException


class Form:
    """Multi-valued form fields parsed from a request body.

    Accessors never raise on conversion problems; the first one encountered is
    recorded on :attr:`err` and the caller-supplied default is returned.
    """

    def __init__(self, values: Mapping[str, Iterable[Any]] | None = None) -> None:
        self._values: dict[str, list[Any]] = {k: list(v) for k, v in (values or {}).items()}
        self._err: InvalidRequestException | None = None

    @classmethod
    def from_items(cls, items: Iterable[tuple[str, Any]]) -> Form:
        """Build a form from ``(key, value)`` pairs, preserving repeated keys."""
        values: dict[str, list[Any]] = {}
        for key, value in items:
            values.setdefault(key, []).append(value)
        return cls(values)

    @property
    def err(self) -> InvalidRequestException | None:
        """First conversion error recorded by an accessor, if any."""
        return self._err

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def string(self, key: str, default: str) -> str:
        """Return the first value of *key* as text, or *default* when absent.

        A non-text value (e.g. an uploaded file) records an error and yields
        *default*.
        """
        values = self._values.get(key)
        if not values:
            return default
        value = values[0]
        if not isinstance(value, str):
            self._add_err(key, value)
            return default
        return value

    def _add_err(self, key: str, value: Any) -> None:
        if self._err is None:
            self._err = InvalidRequestException(
                f"Form field {key!r} is not a text value",
                code="FORM_TYPE",
                context={"field": key, "type": type(value).__name__},
            )
