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
"""OncePerRequestFilter — WebFilter base class with path-pattern matching."""

from __future__ import annotations

import abc
from collections.abc import Iterable
from fnmatch import fnmatch
from typing import Any

from safeweb.web.ports.filter import CallNext


class OncePerRequestFilter(abc.ABC):
    """Base class for :class:`~safeweb.web.ports.filter.WebFilter` implementations.

    ``url_patterns`` restricts the filter to matching paths (all paths when
    empty); ``exclude_patterns`` then removes paths from that set.  Both are
    glob patterns and may be given per instance to override the class
    defaults.
    """

    url_patterns: list[str] = []
    exclude_patterns: list[str] = []

    def __init__(
        self,
        url_patterns: Iterable[str] | None = None,
        exclude_patterns: Iterable[str] | None = None,
    ) -> None:
        if url_patterns is not None:
            self.url_patterns = list(url_patterns)
        if exclude_patterns is not None:
            self.exclude_patterns = list(exclude_patterns)

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` if the request path falls outside this filter's patterns."""
        path: str = request.url.path

        if self.url_patterns and not any(fnmatch(path, p) for p in self.url_patterns):
            return True
        return any(fnmatch(path, p) for p in self.exclude_patterns)

    @abc.abstractmethod
    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Run the filter.  Await ``call_next(request)`` to continue the chain."""
        ...
