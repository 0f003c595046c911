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
"""Private cookies for Starlette — Fernet-sealed values with a per-request jar."""

from __future__ import annotations

from typing import Any

import structlog
from cryptography.fernet import Fernet, InvalidToken
from starlette.responses import Response

from flycsrf.csrf.ports.cookies import Cookie

logger = structlog.get_logger("flycsrf.web")


class CookieCipher:
    """Seals and opens cookie values with Fernet (AES-CBC + HMAC-SHA256).

    Sealed values are URL-safe base64 with the ``=`` padding removed, so
    they need no quoting in a ``Set-Cookie`` header.

    Args:
        key: A Fernet key (32 url-safe base64-encoded bytes).
    """

    def __init__(self, key: str | bytes) -> None:
        self._fernet = Fernet(key)

    @classmethod
    def generate(cls) -> CookieCipher:
        """Cipher with a random key, valid for the lifetime of this process."""
        return cls(Fernet.generate_key())

    def seal(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii").rstrip("=")

    def unseal(self, sealed: str) -> str | None:
        """Return the plaintext, or ``None`` if *sealed* was forged, altered or garbled."""
        padded = sealed + "=" * (-len(sealed) % 4)
        try:
            return self._fernet.decrypt(padded.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError, ValueError):
            return None


class PrivateCookieJar:
    """CookieJar adapter over a Starlette request.

    Inbound private cookies are opened with the cipher. Cookies added during
    the request shadow inbound ones for the rest of the request and are
    written to the response by :meth:`apply`.
    """

    def __init__(self, request: Any, cipher: CookieCipher) -> None:
        self._inbound: dict[str, str] = dict(getattr(request, "cookies", {}) or {})
        self._cipher = cipher
        self._pending: dict[str, Cookie] = {}

    def get_private(self, name: str) -> str | None:
        if name in self._pending:
            return self._pending[name].value
        sealed = self._inbound.get(name)
        if sealed is None:
            return None
        value = self._cipher.unseal(sealed)
        if value is None:
            logger.warning("private_cookie_rejected", cookie_name=name)
        return value

    def add_private(self, cookie: Cookie) -> None:
        self._pending[cookie.name] = cookie

    @property
    def pending(self) -> list[Cookie]:
        return list(self._pending.values())

    def apply(self, response: Response) -> None:
        """Write each pending cookie as a sealed ``Set-Cookie`` header."""
        for cookie in self._pending.values():
            response.set_cookie(
                key=cookie.name,
                value=self._cipher.seal(cookie.value),
                expires=cookie.expires,
                path=cookie.path,
                secure=cookie.secure,
                httponly=cookie.http_only,
                samesite=cookie.same_site,
            )
