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
"""StarletteIncomingRequest — IncomingRequest port over a Starlette request.

The port is synchronous, so :meth:`StarletteIncomingRequest.load` does the
I/O up front: it reads the body once, parses it as a form where the content
type allows, and re-exposes the body to downstream handlers through a
replaying ``receive`` channel.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from starlette.datastructures import FormData
from starlette.formparsers import FormParser, MultiPartException, MultiPartParser
from starlette.requests import ClientDisconnect, Request
from starlette.types import Message, Receive

from safeweb.kernel.exceptions import FormParseException
from safeweb.web.cookie import Cookie
from safeweb.web.form import Form

_URLENCODED = "application/x-www-form-urlencoded"
_MULTIPART = "multipart/form-data"


def _replay(prefix: bytes, receive: Receive, *, more_body: bool = False) -> Receive:
    """Yield *prefix* as one message, then defer to the original channel.

    With ``more_body`` the rest of the body still arrives through *receive*.
    """
    sent = False

    async def _receive() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": prefix, "more_body": more_body}
        return await receive()

    return _receive


async def _read_capped(receive: Receive, limit: int | None) -> tuple[bytes, bool]:
    """Read body messages from *receive*, stopping once they grow past *limit*.

    Returns the bytes read and whether the client has more body to send.
    """
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnect()
        chunk = message.get("body", b"")
        chunks.append(chunk)
        size += len(chunk)
        more_body = message.get("more_body", False)
        if not more_body or (limit is not None and size > limit):
            return b"".join(chunks), more_body


async def _single_chunk(body: bytes) -> AsyncGenerator[bytes, None]:
    # FormParser only flushes the trailing field on an empty chunk.
    yield body
    yield b""


async def _to_form(form_data: FormData) -> Form:
    form = Form.from_items(form_data.multi_items())
    await form_data.close()
    return form


class StarletteIncomingRequest:
    """Request view handed to interceptors; build it with :meth:`load`."""

    def __init__(
        self,
        request: Request,
        body: bytes = b"",
        post_form: Form | None = None,
        multipart_form: Form | None = None,
        form_error: str | None = None,
    ) -> None:
        self._request = request
        self._body = body
        self._post_form = post_form
        self._multipart_form = multipart_form
        self._form_error = form_error

    @classmethod
    async def load(
        cls,
        request: Request,
        *,
        read_body: bool = True,
        max_multipart_size: int | None = None,
    ) -> StarletteIncomingRequest:
        """Read and pre-parse the body of *request*.

        Args:
            request: The Starlette request.  Its body is consumed; use
                :attr:`request` downstream.
            read_body: ``False`` skips body handling altogether.
            max_multipart_size: Reading stops once the body grows past this
                many bytes; such bodies are not parsed, and the unread rest
                is passed through to the handler untouched.
        """
        if not read_body:
            return cls(request)

        body, more_body = await _read_capped(request.receive, max_multipart_size)
        replayed = Request(request.scope, _replay(body, request.receive, more_body=more_body))
        if more_body or (max_multipart_size is not None and len(body) > max_multipart_size):
            return cls(replayed, body, form_error="body exceeds size limit")

        media_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
        if media_type == _URLENCODED:
            parser = FormParser(request.headers, _single_chunk(body))
            return cls(replayed, body, post_form=await _to_form(await parser.parse()))
        if media_type != _MULTIPART:
            return cls(replayed, body, form_error=f"unsupported content type {media_type!r}")

        kwargs: dict[str, Any] = {}
        if max_multipart_size is not None:
            kwargs["max_part_size"] = max_multipart_size
        multipart = MultiPartParser(request.headers, _single_chunk(body), **kwargs)
        try:
            form_data = await multipart.parse()
        except MultiPartException as exc:
            return cls(replayed, body, form_error=f"malformed multipart body: {exc.message}")
        return cls(replayed, body, multipart_form=await _to_form(form_data))

    @property
    def request(self) -> Request:
        """Request to pass downstream; its body is still readable."""
        return self._request

    @property
    def method(self) -> str:
        return self._request.method.upper()

    @property
    def path(self) -> str:
        return self._request.url.path

    def cookie(self, name: str) -> Cookie | None:
        value = self._request.cookies.get(name)
        if value is None:
            return None
        return Cookie(name, value)

    def header(self, name: str) -> str:
        return self._request.headers.get(name, "")

    def post_form(self) -> Form:
        if self._post_form is None:
            raise FormParseException(
                "Request body is not URL-encoded form data",
                code="FORM_URLENCODED",
                context={"detail": self._form_error},
            )
        return self._post_form

    def multipart_form(self, max_size: int) -> Form:
        if self._multipart_form is None:
            raise FormParseException(
                "Request body is not multipart form data",
                code="FORM_MULTIPART",
                context={"detail": self._form_error},
            )
        if len(self._body) > max_size:
            raise FormParseException(
                "Multipart body exceeds size limit",
                code="FORM_TOO_LARGE",
                context={"size": len(self._body), "limit": max_size},
            )
        return self._multipart_form
