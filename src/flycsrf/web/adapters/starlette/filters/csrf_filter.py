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
"""CsrfFilter — makes sure every request carries a CSRF session secret.

Runs before the handler on every request:

1. Resolve the :class:`CsrfConfig`: the one injected at construction,
   else the one :class:`CsrfProtection` put on ``app.state``. Without a
   config the filter logs ``csrf_config_missing`` and lets the request
   through untouched.
2. If the private cookie already holds a usable secret, leave it alone.
   No ``Set-Cookie`` is emitted in that case.
3. Otherwise generate ``cookie_length`` random bytes and store them in the
   private cookie.

The request's cookie jar and the config are attached to ``request.state``
(``csrf_cookies`` and ``csrf_config``) for the token extractor and for
handlers. Nothing outlives the request.
"""

from __future__ import annotations

from typing import Any

import structlog

from flycsrf.csrf.config import MIN_RECOMMENDED_COOKIE_LENGTH, CsrfConfig
from flycsrf.csrf.ports.cookies import CookieJar
from flycsrf.csrf.secret import RandomSecretGenerator
from flycsrf.csrf.store import SessionSecretStore
from flycsrf.web.adapters.starlette.cookies import CookieCipher, PrivateCookieJar
from flycsrf.web.filters import HIGHEST_PRECEDENCE, OncePerRequestFilter, order
from flycsrf.web.ports.filter import CallNext

logger = structlog.get_logger("flycsrf.csrf")


def _managed_config(request: Any) -> CsrfConfig | None:
    app = getattr(request, "app", None)
    state = getattr(app, "state", None)
    return getattr(state, "csrf_config", None)


@order(HIGHEST_PRECEDENCE + 300)
class CsrfFilter(OncePerRequestFilter):
    """Issues the per-session secret cookie.

    Args:
        config: CSRF settings; falls back to ``app.state.csrf_config``.
        cipher: Seals the private cookie.
        store: Reads and writes the secret (default: cookie-backed store).
        generator: Source of random secret bytes.
    """

    def __init__(
        self,
        config: CsrfConfig | None,
        cipher: CookieCipher,
        store: SessionSecretStore | None = None,
        generator: RandomSecretGenerator | None = None,
    ) -> None:
        self._config = config
        self._cipher = cipher
        self._store = store or SessionSecretStore()
        self._generator = generator or RandomSecretGenerator()
        if config is not None and config.cookie_length < MIN_RECOMMENDED_COOKIE_LENGTH:
            logger.warning(
                "csrf_cookie_length_weak",
                cookie_length=config.cookie_length,
                recommended=MIN_RECOMMENDED_COOKIE_LENGTH,
            )

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        jar = PrivateCookieJar(request, self._cipher)
        request.state.csrf_cookies = jar

        config = self._config or _managed_config(request)
        if config is None:
            logger.error("csrf_config_missing", stage="request", path=request.url.path)
        else:
            request.state.csrf_config = config
            self.ensure_secret(jar, config)

        response = await call_next(request)
        jar.apply(response)
        return response

    def ensure_secret(self, jar: CookieJar, config: CsrfConfig) -> bool:
        """Mint and store a secret unless *jar* already holds a usable one.

        Returns:
            ``True`` if a new secret was written.
        """
        if self._store.read(jar, config) is not None:
            return False

        secret = self._generator.generate(config.cookie_length)
        cookie = self._store.write(jar, config, secret)
        logger.info(
            "csrf_cookie_added",
            cookie_name=cookie.name,
            session_cookie=cookie.expires is None,
        )
        return True
