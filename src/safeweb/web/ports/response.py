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
"""ResponseWriter protocol — the mutations interceptors may apply to a response."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from safeweb.web.cookie import Cookie
from safeweb.web.response import Result


@runtime_checkable
class ResponseWriter(Protocol):
    """Write side of an in-flight HTTP exchange."""

    def set_cookie(self, cookie: Cookie) -> None:
        """Attach *cookie* to the outgoing response.

        Raises:
            InvalidCookieException: The cookie cannot be written.
        """
        ...

    def write_error(self, status: int) -> Result:
        """Replace the response with a generic error page for *status*."""
        ...
