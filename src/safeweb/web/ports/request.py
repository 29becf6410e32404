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
"""IncomingRequest protocol — typed, synchronous request accessors.

Interceptors consume requests only through this port.  Adapters are
responsible for any I/O (reading the body) before handing a request over, so
every accessor here is a plain synchronous call.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from safeweb.web.cookie import Cookie
from safeweb.web.form import Form


@runtime_checkable
class IncomingRequest(Protocol):
    """Read-only view of an inbound HTTP request."""

    @property
    def method(self) -> str:
        """Upper-case HTTP method."""
        ...

    @property
    def path(self) -> str:
        """URL path, without query string."""
        ...

    def cookie(self, name: str) -> Cookie | None:
        """Return the named request cookie, or ``None`` when absent."""
        ...

    def header(self, name: str) -> str:
        """Return the named header (case-insensitive), or ``""`` when absent."""
        ...

    def post_form(self) -> Form:
        """Parse the body as ``application/x-www-form-urlencoded``.

        Raises:
            FormParseException: The body is not URL-encoded form data.
        """
        ...

    def multipart_form(self, max_size: int) -> Form:
        """Parse the body as ``multipart/form-data`` of at most *max_size* bytes.

        Raises:
            FormParseException: The body is not multipart or exceeds the cap.
        """
        ...
