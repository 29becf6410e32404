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
"""Cross-Site Request Forgery protection."""

from safeweb.security.xsrf.interceptor import XsrfInterceptor
from safeweb.security.xsrf.strategy import (
    STATE_PRESERVING_METHODS,
    TOKEN_TEMPLATE_FUNC,
    AngularChecker,
    AngularData,
    AngularGenerator,
    AngularInjector,
    Checker,
    DefaultChecker,
    DefaultData,
    DefaultGenerator,
    DefaultInjector,
    Generator,
    Injector,
)
from safeweb.security.xsrf.token import TokenCodec, generate_token, validate_token

__all__ = [
    "STATE_PRESERVING_METHODS",
    "TOKEN_TEMPLATE_FUNC",
    "AngularChecker",
    "AngularData",
    "AngularGenerator",
    "AngularInjector",
    "Checker",
    "DefaultChecker",
    "DefaultData",
    "DefaultGenerator",
    "DefaultInjector",
    "Generator",
    "Injector",
    "TokenCodec",
    "XsrfInterceptor",
    "generate_token",
    "validate_token",
]
