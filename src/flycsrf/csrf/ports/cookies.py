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
"""CookieJar port — tamper-proof cookie storage provided by the host."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Protocol, runtime_checkable


@dataclass(frozen=True)
class Cookie:
    """A cookie to be written to the response.

    ``expires=None`` produces a browser-session cookie (no ``Expires``
    attribute).
    """

    name: str
    value: str
    path: str = "/"
    expires: datetime | None = None
    http_only: bool = True
    same_site: Literal["lax", "strict", "none"] = "strict"
    secure: bool = False


@runtime_checkable
class CookieJar(Protocol):
    """Per-request access to private (encrypted and authenticated) cookies."""

    def get_private(self, name: str) -> str | None:
        """Return the plaintext value of a private cookie, or ``None``.

        Values that fail authentication must read as ``None``.
        """
        ...

    def add_private(self, cookie: Cookie) -> None:
        """Queue *cookie* to be sealed and sent with the response."""
        ...
