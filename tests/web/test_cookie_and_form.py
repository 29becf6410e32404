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
"""Tests for Cookie rendering and Form accessors."""

from __future__ import annotations

import pytest
from jinja2 import DictLoader, Environment

from safeweb.kernel.exceptions import InvalidCookieException, InvalidRequestException
from safeweb.web.cookie import Cookie, SameSite
from safeweb.web.form import Form
from safeweb.web.response import TemplateResponse
from safeweb.web.templating import render_template_response


class TestCookie:
    def test_safe_defaults(self):
        cookie = Cookie("sid", "abc")
        assert cookie.secure is True
        assert cookie.http_only is True
        assert cookie.same_site is SameSite.LAX
        assert cookie.to_header() == "sid=abc; HttpOnly; Secure; SameSite=Lax"

    def test_all_attributes(self):
        cookie = Cookie(
            "XSRF-TOKEN",
            "q1/w2+e3=",
            same_site=SameSite.STRICT,
            path="/",
            domain="example.com",
            max_age=86400,
            http_only=False,
        )
        assert cookie.to_header() == (
            "XSRF-TOKEN=q1/w2+e3=; Path=/; Domain=example.com; Max-Age=86400; Secure; SameSite=Strict"
        )

    def test_default_same_site_omitted(self):
        header = Cookie("sid", "abc", same_site=SameSite.DEFAULT, secure=False, http_only=False).to_header()
        assert header == "sid=abc"

    @pytest.mark.parametrize("name", ["", "bad name", "semi;colon", "quote\""])
    def test_invalid_name_rejected(self, name):
        with pytest.raises(InvalidCookieException):
            Cookie(name, "v")

    @pytest.mark.parametrize("value", ["has space", "semi;colon", "comma,", "back\\slash", "quo\"te"])
    def test_invalid_value_rejected_on_render(self, value):
        with pytest.raises(InvalidCookieException):
            Cookie("sid", value).to_header()

    def test_invalid_path_rejected(self):
        with pytest.raises(InvalidCookieException):
            Cookie("sid", "v", path="/a;b").to_header()


class TestForm:
    def test_first_value_returned(self):
        form = Form.from_items([("a", "1"), ("a", "2"), ("b", "3")])
        assert form.string("a", "") == "1"
        assert form.string("b", "") == "3"
        assert form.err is None

    def test_missing_key_default(self):
        assert Form().string("missing", "fallback") == "fallback"

    def test_non_text_value_records_error(self):
        form = Form({"upload": [b"binary"]})
        assert form.string("upload", "d") == "d"
        assert isinstance(form.err, InvalidRequestException)
        assert form.err.context["field"] == "upload"

    def test_first_error_kept(self):
        form = Form({"x": [1], "y": [2]})
        form.string("x", "")
        form.string("y", "")
        assert form.err.context["field"] == "x"

    def test_contains(self):
        assert "a" in Form({"a": ["1"]})
        assert "b" not in Form({"a": ["1"]})


class TestTemplateRendering:
    def test_func_map_callable_from_template(self):
        env = Environment(loader=DictLoader({"form.html": "{{ data }}|{{ XSRFToken() }}"}))
        response = TemplateResponse("form.html", data="title", func_map={"XSRFToken": lambda: "tok:1"})
        assert render_template_response(env, response) == "title|tok:1"
