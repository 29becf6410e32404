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
"""Jinja2 rendering of :class:`~safeweb.web.response.TemplateResponse`."""

from __future__ import annotations

from jinja2 import Environment

from safeweb.web.response import TemplateResponse


def render_template_response(env: Environment, response: TemplateResponse) -> str:
    """Render *response* with its function map in scope.

    ``response.data`` is available as ``data``; every ``func_map`` entry is
    callable by name, e.g. ``{{ XSRFToken() }}``.
    """
    template = env.get_template(response.template)
    return template.render({**response.func_map, "data": response.data})
