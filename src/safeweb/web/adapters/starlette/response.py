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
"""StarletteResponseWriter — ResponseWriter port that buffers mutations.

Interceptor hooks run before the final Starlette response exists, so the
writer records cookies and error statuses and :meth:`render` applies them
once the response is known.
"""

from __future__ import annotations

from http import HTTPStatus

from starlette.responses import PlainTextResponse, Response

from safeweb.web.cookie import Cookie
from safeweb.web.response import Result


class StarletteResponseWriter:
    """Collects ``Set-Cookie`` headers and an optional error status."""

    def __init__(self) -> None:
        self._cookie_headers: list[str] = []
        self._error_status: HTTPStatus | None = None

    @property
    def error_status(self) -> HTTPStatus | None:
        return self._error_status

    def set_cookie(self, cookie: Cookie) -> None:
        self._cookie_headers.append(cookie.to_header())

    def write_error(self, status: int) -> Result:
        self._error_status = HTTPStatus(status)
        return Result.written()

    def render(self, response: Response | None = None) -> Response:
        """Return *response* with the recorded cookies, or the error page.

        Error pages carry only the status phrase and no cookies.
        """
        if self._error_status is not None:
            return PlainTextResponse(self._error_status.phrase, status_code=self._error_status.value)
        if response is None:
            raise ValueError("No response to render and no error recorded")
        for header in self._cookie_headers:
            response.raw_headers.append((b"set-cookie", header.encode("latin-1")))
        return response
