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
"""CsrfHeaderFilter — checks the ``X-CSRF-Token`` header against the session secret.

The header carries an authenticity token (as rendered by
:func:`flycsrf.csrf.meta.csrf_meta_tags`). When it verifies, the request's
:class:`CsrfToken` is cached on ``request.state.csrf_header_token``.

Two modes:

* **Advisory** (default) — a missing header, a missing config or a failed
  verification is logged and the request continues. Handlers that need
  protection must verify the token themselves.
* **Enforcing** (``enforce=True``) — the same conditions answer 403 for
  unsafe methods (POST, PUT, PATCH, DELETE). Safe methods are never
  rejected so that first page loads still work.

Must run after :class:`CsrfFilter`, which attaches the cookie jar.
"""

from __future__ import annotations

from typing import Any

import structlog
from starlette.concurrency import run_in_threadpool

from flycsrf.csrf.config import CsrfConfig
from flycsrf.csrf.store import SessionSecretStore
from flycsrf.csrf.token import HEADER_NAME, AuthenticityTokenMinter, CsrfToken
from flycsrf.kernel.exceptions import CsrfTokenMissingException, FlyCsrfException, VerificationFailure
from flycsrf.web.adapters.starlette.errors import error_response
from flycsrf.web.filters import HIGHEST_PRECEDENCE, OncePerRequestFilter, order
from flycsrf.web.ports.filter import CallNext

logger = structlog.get_logger("flycsrf.csrf")

SAFE_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})
"""HTTP methods that are never rejected by the header check."""


@order(HIGHEST_PRECEDENCE + 310)
class CsrfHeaderFilter(OncePerRequestFilter):
    """Verifies the CSRF request header on every request."""

    def __init__(
        self,
        config: CsrfConfig | None = None,
        header_name: str = HEADER_NAME,
        enforce: bool = False,
        store: SessionSecretStore | None = None,
        minter: AuthenticityTokenMinter | None = None,
    ) -> None:
        self._config = config
        self._header_name = header_name
        self._enforce = enforce
        self._store = store or SessionSecretStore()
        self._minter = minter

    @property
    def enforcing(self) -> bool:
        return self._enforce

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        failure = await self._check(request)

        if failure is not None and self._enforce and request.method not in SAFE_METHODS:
            logger.warning("csrf_request_rejected", method=request.method, path=request.url.path)
            return error_response(request, failure, 403)

        return await call_next(request)

    async def _check(self, request: Any) -> FlyCsrfException | None:
        """Return the problem with this request's header, or ``None`` if it verified."""
        config = self._config or getattr(request.state, "csrf_config", None)
        if config is None:
            logger.error("csrf_config_missing", stage="header", path=request.url.path)
            return CsrfTokenMissingException("CSRF protection is not configured")

        submitted = request.headers.get(self._header_name)
        if not submitted:
            logger.warning("csrf_header_missing", header=self._header_name, path=request.url.path)
            return VerificationFailure(f"Request lacks {self._header_name}")

        jar = getattr(request.state, "csrf_cookies", None)
        raw = self._store.read(jar, config) if jar is not None else None
        if raw is None:
            logger.warning("csrf_session_secret_missing", cookie_name=config.cookie_name)
            return CsrfTokenMissingException()

        minter = self._minter or AuthenticityTokenMinter(rounds=config.hash_rounds)
        token = CsrfToken(self._store.encoded(raw), minter)
        if not await run_in_threadpool(minter.matches, token.value, submitted):
            logger.error("csrf_header_invalid", header=self._header_name, path=request.url.path)
            return VerificationFailure()

        logger.info("csrf_header_verified", path=request.url.path)
        request.state.csrf_header_token = token
        return None
