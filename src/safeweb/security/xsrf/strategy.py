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
"""XSRF strategies — Checker / Generator / Injector triples.

Two strategies ship with safeweb:

* **Default** — a random session identifier in an HTTP-only cookie, plus an
  HMAC token bound to that identifier and the request path.  The token is
  handed to page templates (``XSRFToken``) and must come back in the
  ``xsrf-token`` form field.
* **Angular** — a random value in a script-readable cookie that the client
  copies into a request header.  The check is plain equality.

Requests using a state-preserving method (GET, HEAD, OPTIONS) are never
checked: they are trusted to have no side effects.
"""

from __future__ import annotations

import base64
import hmac
import logging
import secrets
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Protocol, runtime_checkable

from safeweb.kernel.exceptions import (
    FormParseException,
    XsrfGenerationException,
    XsrfInjectionException,
)
from safeweb.security.xsrf.token import Key, TokenCodec
from safeweb.web.cookie import Cookie, SameSite
from safeweb.web.ports.request import IncomingRequest
from safeweb.web.ports.response import ResponseWriter

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
STATE_PRESERVING_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "OPTIONS"})
"""HTTP methods exempt from XSRF checks."""

DEFAULT_COOKIE_NAME: str = "xsrf-cookie"
DEFAULT_TOKEN_FIELD: str = "xsrf-token"

TOKEN_TEMPLATE_FUNC: str = "XSRFToken"
"""Name under which the Default strategy exposes the token to templates."""

DEFAULT_MULTIPART_MAX_SIZE: int = 32 << 20
ANGULAR_COOKIE_MAX_AGE: int = 86400
SESSION_ID_BYTES: int = 20


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------
@runtime_checkable
class Checker(Protocol):
    """Decides whether a request carries valid XSRF proof."""

    def check(self, request: IncomingRequest) -> HTTPStatus: ...


@runtime_checkable
class Generator(Protocol):
    """Produces the proof material to attach to a response."""

    def generate(self, request: IncomingRequest) -> Any: ...


@runtime_checkable
class Injector(Protocol):
    """Attaches data produced by the matching :class:`Generator` to a response."""

    def inject(self, response: Any, writer: ResponseWriter, data: Any) -> None: ...


# ---------------------------------------------------------------------------
# Generated data
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DefaultData:
    """Output of :class:`DefaultGenerator`."""

    cookie: Cookie
    token: str = field(repr=False)
    set_cookie: bool = False


@dataclass(frozen=True)
class AngularData:
    """Output of :class:`AngularGenerator`."""

    cookie: Cookie
    set_cookie: bool = False


def new_session_id() -> str:
    """Return a fresh random identifier, standard base64 encoded.

    Raises:
        XsrfGenerationException: The system random source failed.
    """
    try:
        raw = secrets.token_bytes(SESSION_ID_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise XsrfGenerationException(
            "System random source unavailable",
            code="XSRF_RANDOM",
        ) from exc
    return base64.b64encode(raw).decode("ascii")


def _require_data(data: Any, expected: type) -> None:
    if not isinstance(data, expected):
        raise XsrfInjectionException(
            "invalid data received",
            code="XSRF_DATA",
            context={"expected": expected.__name__, "received": type(data).__name__},
        )


# ---------------------------------------------------------------------------
# Default strategy
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DefaultGenerator:
    secret_key: Key = field(repr=False)
    cookie_name: str = DEFAULT_COOKIE_NAME
    codec: TokenCodec = field(default_factory=TokenCodec)

    def generate(self, request: IncomingRequest) -> DefaultData:
        cookie = request.cookie(self.cookie_name)
        set_cookie = False
        if cookie is None:
            cookie = Cookie(self.cookie_name, new_session_id(), same_site=SameSite.STRICT)
            set_cookie = True
        try:
            token = self.codec.generate(self.secret_key, cookie.value, request.path)
        except (TypeError, ValueError, UnicodeError) as exc:
            raise XsrfGenerationException("Token generation failed", code="XSRF_TOKEN") from exc
        return DefaultData(cookie=cookie, token=token, set_cookie=set_cookie)


@dataclass(frozen=True)
class DefaultChecker:
    """Validates the HMAC token posted in a form field.

    Outcomes for non state-preserving methods, first match wins:

    * no session cookie → 403
    * body neither URL-encoded nor multipart form → 400
    * token field missing, empty or not text → 401
    * token invalid for (key, cookie value, path) or expired → 403
    * otherwise → 200
    """

    secret_key: Key = field(repr=False)
    cookie_name: str = DEFAULT_COOKIE_NAME
    token_field: str = DEFAULT_TOKEN_FIELD
    max_multipart_size: int = DEFAULT_MULTIPART_MAX_SIZE
    codec: TokenCodec = field(default_factory=TokenCodec)

    def check(self, request: IncomingRequest) -> HTTPStatus:
        if request.method in STATE_PRESERVING_METHODS:
            return HTTPStatus.OK

        cookie = request.cookie(self.cookie_name)
        if cookie is None:
            logger.debug("xsrf: session cookie %r missing", self.cookie_name)
            return HTTPStatus.FORBIDDEN

        try:
            form = request.post_form()
        except FormParseException:
            # Multipart bodies are equally valid carriers of the token.
            try:
                form = request.multipart_form(self.max_multipart_size)
            except FormParseException as exc:
                logger.debug("xsrf: request body is not a form: %s", exc)
                return HTTPStatus.BAD_REQUEST

        token = form.string(self.token_field, "")
        if form.err is not None or not token:
            logger.debug("xsrf: token field %r missing or empty", self.token_field)
            return HTTPStatus.UNAUTHORIZED

        if not self.codec.validate(token, self.secret_key, cookie.value, request.path):
            logger.debug("xsrf: token rejected for path %s", request.path)
            return HTTPStatus.FORBIDDEN
        return HTTPStatus.OK


class DefaultInjector:
    """Sets the session cookie when new and binds ``XSRFToken`` for templates.

    Responses without a template function map are left alone.
    """

    def inject(self, response: Any, writer: ResponseWriter, data: Any) -> None:
        _require_data(data, DefaultData)
        if data.set_cookie:
            writer.set_cookie(data.cookie)

        func_map = getattr(response, "func_map", None)
        if not isinstance(func_map, MutableMapping):
            logger.debug("xsrf: %s is not template-backed; token not bound", type(response).__name__)
            return
        token = data.token
        func_map[TOKEN_TEMPLATE_FUNC] = lambda: token


# ---------------------------------------------------------------------------
# Angular strategy
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AngularGenerator:
    cookie_name: str

    def generate(self, request: IncomingRequest) -> AngularData:
        cookie = request.cookie(self.cookie_name)
        if cookie is not None:
            return AngularData(cookie=cookie)
        cookie = Cookie(
            self.cookie_name,
            new_session_id(),
            same_site=SameSite.STRICT,
            path="/",
            max_age=ANGULAR_COOKIE_MAX_AGE,
            # Client-side script copies the value into the request header.
            http_only=False,
        )
        return AngularData(cookie=cookie, set_cookie=True)


@dataclass(frozen=True)
class AngularChecker:
    """Requires the header *header_name* to equal the cookie *cookie_name*."""

    cookie_name: str
    header_name: str

    def check(self, request: IncomingRequest) -> HTTPStatus:
        if request.method in STATE_PRESERVING_METHODS:
            return HTTPStatus.OK

        cookie = request.cookie(self.cookie_name)
        if cookie is None:
            logger.debug("xsrf: token cookie %r missing", self.cookie_name)
            return HTTPStatus.FORBIDDEN

        token = request.header(self.header_name)
        if not token or not hmac.compare_digest(token.encode("utf-8"), cookie.value.encode("utf-8")):
            logger.debug("xsrf: header %r missing or does not match cookie", self.header_name)
            return HTTPStatus.UNAUTHORIZED
        return HTTPStatus.OK


class AngularInjector:
    def inject(self, response: Any, writer: ResponseWriter, data: Any) -> None:
        _require_data(data, AngularData)
        if data.set_cookie:
            writer.set_cookie(data.cookie)
