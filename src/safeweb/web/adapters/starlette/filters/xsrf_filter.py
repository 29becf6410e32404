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
"""XsrfFilter — runs an :class:`XsrfInterceptor` inside the WebFilter chain.

Per request:

1. The body of state-changing requests is read and pre-parsed
   (:class:`StarletteIncomingRequest`).
2. ``before`` — a rejected request is answered with a bare error status and
   never reaches the handler.
3. ``commit`` — proof material is generated.  Template functions are bound
   to ``request.state`` *before* the handler runs, because handlers render
   their templates themselves; see
   :func:`~safeweb.web.adapters.starlette.templating.template_functions`.
4. The handler runs; new cookies are appended to its response.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from safeweb.config.properties.xsrf import XsrfProperties
from safeweb.container.ordering import HIGHEST_PRECEDENCE, order
from safeweb.security.xsrf.interceptor import XsrfInterceptor
from safeweb.security.xsrf.strategy import DEFAULT_MULTIPART_MAX_SIZE, STATE_PRESERVING_METHODS
from safeweb.web.adapters.starlette.request import StarletteIncomingRequest
from safeweb.web.adapters.starlette.response import StarletteResponseWriter
from safeweb.web.adapters.starlette.templating import RequestTemplateContext
from safeweb.web.filters import OncePerRequestFilter
from safeweb.web.ports.filter import CallNext

logger = structlog.get_logger("safeweb.web")


@order(HIGHEST_PRECEDENCE + 400)
class XsrfFilter(OncePerRequestFilter):
    """Cross-Site Request Forgery protection filter."""

    def __init__(
        self,
        interceptor: XsrfInterceptor,
        *,
        max_multipart_size: int = DEFAULT_MULTIPART_MAX_SIZE,
        url_patterns: Iterable[str] | None = None,
        exclude_patterns: Iterable[str] | None = None,
    ) -> None:
        super().__init__(url_patterns=url_patterns, exclude_patterns=exclude_patterns)
        self._interceptor = interceptor
        self._max_multipart_size = max_multipart_size

    @classmethod
    def from_properties(cls, props: XsrfProperties) -> XsrfFilter:
        return cls(
            XsrfInterceptor.from_properties(props),
            max_multipart_size=props.max_multipart_size,
            exclude_patterns=props.exclude_patterns,
        )

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        incoming = await StarletteIncomingRequest.load(
            request,
            read_body=request.method.upper() not in STATE_PRESERVING_METHODS,
            max_multipart_size=self._max_multipart_size,
        )
        writer = StarletteResponseWriter()

        if self._interceptor.before(writer, incoming).is_written:
            logger.info(
                "xsrf_request_rejected",
                method=incoming.method,
                path=incoming.path,
                status_code=writer.error_status,
            )
            return writer.render()

        template_context = RequestTemplateContext()
        if self._interceptor.commit(writer, incoming, template_context).is_written:
            logger.error(
                "xsrf_commit_failed",
                method=incoming.method,
                path=incoming.path,
            )
            return writer.render()
        template_context.attach(incoming.request)

        response = cast(Response, await call_next(incoming.request))
        return writer.render(response)
