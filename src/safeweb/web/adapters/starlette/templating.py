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
"""Jinja2 integration — exposes interceptor-bound template functions to pages.

Usage::

    templates = Jinja2Templates(
        directory="templates",
        context_processors=[template_functions],
    )

and in a template::

    <input type="hidden" name="xsrf-token" value="{{ XSRFToken() }}">
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from starlette.requests import Request

TEMPLATE_FUNCS_STATE_KEY = "template_funcs"
"""``request.state`` attribute holding the per-request template function map."""


class RequestTemplateContext:
    """Template-backed stand-in handed to interceptors before the handler runs.

    Injectors add entries to :attr:`func_map`; :func:`template_functions`
    later exposes them to every template rendered for the same request.
    """

    def __init__(self) -> None:
        self.func_map: dict[str, Callable[..., Any]] = {}

    def attach(self, request: Request) -> None:
        setattr(request.state, TEMPLATE_FUNCS_STATE_KEY, self.func_map)


def template_functions(request: Request) -> dict[str, Any]:
    """Starlette context processor returning the request's bound template functions."""
    return dict(getattr(request.state, TEMPLATE_FUNCS_STATE_KEY, None) or {})
