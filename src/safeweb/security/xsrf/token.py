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
"""Time-limited HMAC tokens bound to a session identifier and a path.

Token layout::

    <urlsafe-b64(HMAC-SHA256(key, clean(session) ":" clean(path) ":" millis))>:<millis>

``millis`` is the issue time in Unix milliseconds.  ``clean`` percent-escapes
``%`` and ``:``, so the separators are unambiguous and distinct (session,
path) pairs never produce the same MAC input.  Nothing is stored server side:
validation recomputes the MAC for the embedded issue time and compares in
constant time.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
from collections.abc import Callable
from datetime import timedelta

DEFAULT_TIMEOUT: timedelta = timedelta(hours=24)
"""Default validity window of a token."""

FUTURE_GRACE: timedelta = timedelta(minutes=1)
"""How far in the future an issue time may lie (clock skew between servers)."""

Key = str | bytes


def _clean(value: str) -> str:
    return value.replace("%", "%25").replace(":", "%3A")


def _key_bytes(key: Key) -> bytes:
    return key if isinstance(key, bytes) else key.encode("utf-8")


class TokenCodec:
    """Generates and validates XSRF tokens.

    Args:
        timeout: How long a token stays valid after issue.  Must be positive.
        clock: Returns the current time in seconds since the epoch.
    """

    def __init__(
        self,
        timeout: timedelta = DEFAULT_TIMEOUT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if timeout <= timedelta(0):
            raise ValueError(f"Token timeout must be positive, got {timeout}")
        self._timeout = timeout
        self._timeout_ms = int(timeout.total_seconds() * 1000)
        self._grace_ms = int(FUTURE_GRACE.total_seconds() * 1000)
        self._clock = clock

    @property
    def timeout(self) -> timedelta:
        return self._timeout

    def generate(self, key: Key, session_id: str, path: str) -> str:
        """Return a token for *(key, session_id, path)* issued now."""
        return self._generate_at(key, session_id, path, self._now_ms())

    def validate(self, token: str, key: Key, session_id: str, path: str) -> bool:
        """Return ``True`` iff *token* was issued for *(key, session_id, path)* and has not expired.

        Malformed tokens yield ``False``.
        """
        if not token.isascii():
            return False
        _, sep, millis = token.rpartition(":")
        if not sep or not millis.isdigit():
            return False

        issued = int(millis)
        now = self._now_ms()
        if now - issued >= self._timeout_ms:
            return False
        if issued > now + self._grace_ms:
            return False

        expected = self._generate_at(key, session_id, path, issued)
        return hmac.compare_digest(token.encode("ascii"), expected.encode("ascii"))

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    @staticmethod
    def _generate_at(key: Key, session_id: str, path: str, millis: int) -> str:
        message = f"{_clean(session_id)}:{_clean(path)}:{millis}".encode()
        digest = hmac.new(_key_bytes(key), message, hashlib.sha256).digest()
        mac = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
        return f"{mac}:{millis}"


_default_codec = TokenCodec()


def generate_token(key: Key, session_id: str, path: str) -> str:
    """Generate a token with the default 24 hour validity window."""
    return _default_codec.generate(key, session_id, path)


def validate_token(token: str, key: Key, session_id: str, path: str) -> bool:
    """Validate a token against the default 24 hour validity window."""
    return _default_codec.validate(token, key, session_id, path)
