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
"""SessionSecretStore — persists the session secret in a private cookie."""

from __future__ import annotations

from datetime import UTC, datetime

from flycsrf.csrf.config import CsrfConfig
from flycsrf.csrf.ports.cookies import Cookie, CookieJar
from flycsrf.csrf.secret import SecretCodec


class SessionSecretStore:
    """Reads and writes the per-session secret through a :class:`CookieJar`.

    The store keeps no state of its own; the secret lives only in the
    request's cookie jar.
    """

    def __init__(self, codec: SecretCodec | None = None) -> None:
        self._codec = codec or SecretCodec()

    def read(self, jar: CookieJar, config: CsrfConfig) -> bytes | None:
        """Return the decoded secret, or ``None`` if it is missing, malformed or too short."""
        value = jar.get_private(config.cookie_name)
        if value is None:
            return None
        raw = self._codec.decode(value)
        if raw is None or not config.accepts_length(len(raw)):
            return None
        return raw

    def write(
        self,
        jar: CookieJar,
        config: CsrfConfig,
        secret: bytes,
        now: datetime | None = None,
    ) -> Cookie:
        """Encode *secret* and add it to *jar* as a private cookie."""
        expires = None
        if config.lifespan is not None:
            expires = (now or datetime.now(UTC)) + config.lifespan
        cookie = Cookie(
            name=config.cookie_name,
            value=self._codec.encode(secret),
            path="/",
            expires=expires,
            secure=config.secure_cookie,
        )
        jar.add_private(cookie)
        return cookie

    def encoded(self, secret: bytes) -> str:
        return self._codec.encode(secret)
