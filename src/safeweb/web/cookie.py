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
"""Cookie — framework-neutral description of a ``Set-Cookie`` value.

Defaults are the safe ones: ``Secure``, ``HttpOnly`` and ``SameSite=Lax``.
Strategies relax them explicitly where a client needs otherwise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from safeweb.kernel.exceptions import InvalidCookieException

# RFC 6265 cookie-name = token (RFC 7230 tchar)
_COOKIE_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# cookie-octet: no DQUOTE, comma, semicolon, backslash or whitespace
_COOKIE_VALUE_RE = re.compile(r"^[\x21\x23-\x2B\x2D-\x3A\x3C-\x5B\x5D-\x7E]*$")
_ATTR_VALUE_RE = re.compile(r"^[\x20-\x3A\x3C-\x7E]*$")


class SameSite(str, Enum):
    """``SameSite`` cookie attribute."""

    DEFAULT = ""
    LAX = "lax"
    STRICT = "strict"
    NONE = "none"


@dataclass
class Cookie:
    """An HTTP cookie as read from a request or written to a response.

    Attributes:
        name: Cookie name; must be a valid RFC 6265 token.
        value: Cookie value.
        same_site: ``SameSite`` mode; ``SameSite.DEFAULT`` omits the attribute.
        path: ``Path`` attribute, or ``None`` to omit it.
        domain: ``Domain`` attribute, or ``None`` to omit it.
        max_age: ``Max-Age`` in seconds, or ``None`` for a session cookie.
        secure: Send the cookie over HTTPS only.
        http_only: Hide the cookie from client-side script.
    """

    name: str
    value: str
    same_site: SameSite = SameSite.LAX
    path: str | None = None
    domain: str | None = None
    max_age: int | None = None
    secure: bool = True
    http_only: bool = True

    def __post_init__(self) -> None:
        if not _COOKIE_NAME_RE.match(self.name):
            raise InvalidCookieException(
                f"Invalid cookie name: {self.name!r}",
                code="COOKIE_NAME",
                context={"name": self.name},
            )

    def to_header(self) -> str:
        """Render the ``Set-Cookie`` header value for this cookie.

        Raises:
            InvalidCookieException: The value or an attribute contains
                characters not allowed in a cookie.
        """
        if not _COOKIE_VALUE_RE.match(self.value):
            raise InvalidCookieException(
                f"Invalid value for cookie {self.name!r}",
                code="COOKIE_VALUE",
                context={"name": self.name},
            )
        parts = [f"{self.name}={self.value}"]
        for attr, value in (("Path", self.path), ("Domain", self.domain)):
            if value is None:
                continue
            if not _ATTR_VALUE_RE.match(value):
                raise InvalidCookieException(
                    f"Invalid {attr} for cookie {self.name!r}: {value!r}",
                    code="COOKIE_ATTRIBUTE",
                    context={"name": self.name, "attribute": attr},
                )
            parts.append(f"{attr}={value}")
        if self.max_age is not None:
            parts.append(f"Max-Age={max(self.max_age, 0)}")
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.same_site is not SameSite.DEFAULT:
            parts.append(f"SameSite={self.same_site.value.capitalize()}")
        return "; ".join(parts)
