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
"""XSRF protection configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from safeweb.core.config import config_properties


@config_properties(prefix="safeweb.xsrf")
@dataclass
class XsrfProperties:
    """Configuration for XSRF protection (safeweb.xsrf.*).

    strategy selects default (HMAC token in a form field) or
    angular (cookie value echoed in a request header).
    """

    strategy: str = "default"
    secret_key: str = ""
    cookie_name: str = "xsrf-cookie"
    token_field: str = "xsrf-token"
    header_name: str = "X-XSRF-TOKEN"
    token_timeout: int = 86400
    max_multipart_size: int = 32 << 20
    exclude_patterns: list[str] = field(default_factory=list)
