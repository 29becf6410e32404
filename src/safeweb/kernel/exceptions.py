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
"""Exception hierarchy for safeweb.

Every error raised by the library derives from :class:`SafewebException`, so
callers can catch one type to handle all framework failures, or a specific
subclass for targeted handling.
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class SafewebException(Exception):
    """Base exception for all safeweb errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "XSRF_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Request Exceptions
# =============================================================================


class InvalidRequestException(SafewebException):
    """Request could not be interpreted as required."""


class FormParseException(InvalidRequestException):
    """Request body is not a form of the expected encoding, or exceeds the size cap."""


class InvalidCookieException(SafewebException):
    """Cookie name or attributes are not acceptable for a ``Set-Cookie`` header."""


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(SafewebException):
    """Authentication, authorization and request-forgery errors."""


class XsrfException(SecurityException):
    """Failure while issuing XSRF proof material."""


class XsrfGenerationException(XsrfException):
    """The session identifier or token could not be produced."""


class XsrfInjectionException(XsrfException):
    """Generated data could not be attached to the response."""
