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
"""XsrfInterceptor — runs an XSRF strategy at the two pipeline hooks.

* :meth:`XsrfInterceptor.before` rejects requests lacking valid proof.
* :meth:`XsrfInterceptor.commit` issues fresh proof on the response.

An interceptor is immutable and safe to share between concurrent requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from http import HTTPStatus
from typing import Any

from safeweb.config.properties.xsrf import XsrfProperties
from safeweb.security.xsrf.strategy import (
    DEFAULT_COOKIE_NAME,
    DEFAULT_TOKEN_FIELD,
    AngularChecker,
    AngularGenerator,
    AngularInjector,
    Checker,
    DefaultChecker,
    DefaultGenerator,
    DefaultInjector,
    Generator,
    Injector,
)
from safeweb.security.xsrf.token import DEFAULT_TIMEOUT, Key, TokenCodec
from safeweb.web.ports.request import IncomingRequest
from safeweb.web.ports.response import ResponseWriter
from safeweb.web.response import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class XsrfInterceptor:
    """Request interceptor enforcing XSRF protection.

    Args:
        secret_key: Server-side application key; ``None`` for strategies
            that derive nothing from it.
        generator: Produces proof material for the response.
        checker: Validates proof carried by the request.
        injector: Attaches the generator's output to the response.
    """

    secret_key: Key | None = field(repr=False)
    generator: Generator
    checker: Checker
    injector: Injector

    @classmethod
    def default(
        cls,
        secret_key: Key,
        *,
        timeout: timedelta = DEFAULT_TIMEOUT,
    ) -> XsrfInterceptor:
        """Double-submit cookie plus an HMAC token posted in the ``xsrf-token`` form field."""
        if not secret_key:
            raise ValueError("XSRF secret key must not be empty")
        codec = TokenCodec(timeout=timeout)
        return cls(
            secret_key=secret_key,
            generator=DefaultGenerator(secret_key, DEFAULT_COOKIE_NAME, codec),
            checker=DefaultChecker(secret_key, DEFAULT_COOKIE_NAME, DEFAULT_TOKEN_FIELD, codec=codec),
            injector=DefaultInjector(),
        )

    @classmethod
    def angular(cls, cookie_name: str, header_name: str) -> XsrfInterceptor:
        """Script-readable cookie echoed back in *header_name*."""
        return cls(
            secret_key=None,
            generator=AngularGenerator(cookie_name),
            checker=AngularChecker(cookie_name, header_name),
            injector=AngularInjector(),
        )

    @classmethod
    def from_properties(cls, props: XsrfProperties) -> XsrfInterceptor:
        """Build the strategy selected by ``safeweb.xsrf.strategy``."""
        strategy = props.strategy.lower()
        if strategy == "angular":
            return cls.angular(props.cookie_name, props.header_name)
        if strategy != "default":
            raise ValueError(f"Unknown XSRF strategy: {props.strategy!r}")
        if not props.secret_key:
            raise ValueError("safeweb.xsrf.secret-key is required for the default XSRF strategy")

        codec = TokenCodec(timeout=timedelta(seconds=props.token_timeout))
        return cls(
            secret_key=props.secret_key,
            generator=DefaultGenerator(props.secret_key, props.cookie_name, codec),
            checker=DefaultChecker(
                props.secret_key,
                props.cookie_name,
                props.token_field,
                max_multipart_size=props.max_multipart_size,
                codec=codec,
            ),
            injector=DefaultInjector(),
        )

    def before(self, writer: ResponseWriter, request: IncomingRequest) -> Result:
        """Reject *request* with the checker's status unless it is 200 OK."""
        status = self.checker.check(request)
        if status != HTTPStatus.OK:
            logger.info(
                "xsrf check failed: %s %s -> %d",
                request.method,
                request.path,
                status,
            )
            return writer.write_error(status)
        return Result.not_written()

    def commit(self, writer: ResponseWriter, request: IncomingRequest, response: Any) -> Result:
        """Generate proof material and attach it to *response*.

        Any failure of the generator or injector, including custom ones,
        replaces the response with a bare 500; details are logged only.
        """
        try:
            data = self.generator.generate(request)
            self.injector.inject(response, writer, data)
        except Exception:
            logger.exception("xsrf commit failed for %s %s", request.method, request.path)
            return writer.write_error(HTTPStatus.INTERNAL_SERVER_ERROR)
        return Result.not_written()
