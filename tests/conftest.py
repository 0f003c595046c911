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
"""Shared fixtures for FlyCSRF tests."""

from __future__ import annotations

import pytest

from flycsrf.csrf.ports.cookies import Cookie
from flycsrf.web.adapters.starlette.cookies import CookieCipher


class DictCookieJar:
    """In-memory CookieJar: values are stored in plaintext, as if already unsealed."""

    def __init__(self, cookies: dict[str, str] | None = None) -> None:
        self.cookies: dict[str, str] = dict(cookies or {})
        self.added: list[Cookie] = []

    def get_private(self, name: str) -> str | None:
        return self.cookies.get(name)

    def add_private(self, cookie: Cookie) -> None:
        self.added.append(cookie)
        self.cookies[cookie.name] = cookie.value


@pytest.fixture
def jar() -> DictCookieJar:
    return DictCookieJar()


@pytest.fixture
def cipher() -> CookieCipher:
    return CookieCipher.generate()
