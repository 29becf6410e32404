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
"""WebFilterChainMiddleware — pure ASGI middleware running an ordered WebFilter chain."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from safeweb.container.ordering import sort_by_order
from safeweb.web.ports.filter import CallNext, WebFilter


class WebFilterChainMiddleware:
    """Runs *filters* (sorted by ``@order``) around the downstream ASGI app.

    The innermost link runs the app against the request it receives, using
    that request's ``receive`` channel, so a filter that consumed the body can
    pass on a request that replays it.  The app's output is buffered into a
    :class:`~starlette.responses.Response` for filters to post-process.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self._filters = sort_by_order(list(filters))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        chain: CallNext = self._call_app
        for f in reversed(self._filters):
            chain = _wrap(f, chain)

        response = cast(Response, await chain(Request(scope, receive, send)))
        await response(scope, receive, send)

    async def _call_app(self, request: Request) -> Response:
        status_code = 200
        raw_headers: list[tuple[bytes, bytes]] = []
        body_parts: list[bytes] = []

        async def _capture(message: Any) -> None:
            nonlocal status_code, raw_headers
            if message["type"] == "http.response.start":
                status_code = message["status"]
                raw_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                body = message.get("body", b"")
                if body:
                    body_parts.append(body)

        await self.app(request.scope, request.receive, _capture)

        response = Response(content=b"".join(body_parts), status_code=status_code)
        response.raw_headers[:] = raw_headers
        return response


def _wrap(web_filter: WebFilter, next_call: CallNext) -> CallNext:
    async def _inner(request: Request) -> Response:
        if web_filter.should_not_filter(request):
            return cast(Response, await next_call(request))
        return cast(Response, await web_filter.do_filter(request, next_call))

    return _inner
