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
"""CsrfProtection — wires CSRF filters and error handling into a Starlette app."""

from __future__ import annotations

from typing import Any

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware

from flycsrf.core.config import Config
from flycsrf.csrf.config import CsrfConfig, CsrfProperties
from flycsrf.csrf.token import HEADER_NAME
from flycsrf.kernel.exceptions import FlyCsrfException
from flycsrf.web.adapters.starlette.cookies import CookieCipher
from flycsrf.web.adapters.starlette.errors import csrf_exception_handler
from flycsrf.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flycsrf.web.adapters.starlette.filters.csrf_filter import CsrfFilter
from flycsrf.web.adapters.starlette.filters.csrf_header_filter import CsrfHeaderFilter
from flycsrf.web.ports.filter import WebFilter

logger = structlog.get_logger("flycsrf.csrf")


class CsrfProtection:
    """Entry point for adding CSRF protection to an application.

    Usage::

        protection = CsrfProtection(CsrfConfig().with_lifetime(None), cipher)
        app = protection.install(Starlette(routes=routes))

    Args:
        config: CSRF settings (defaults: 1 day, ``csrf_token``, 32 bytes).
        cipher: Seals the private cookie. Without one, a random key is
            generated and cookies do not survive a restart or reach
            other processes.
        verify_header: Add :class:`CsrfHeaderFilter` to the chain.
        enforce_header: Make the header filter reject unsafe requests.
        header_name: Header checked by the header filter.
        extra_filters: Further filters to run in the same chain.
    """

    def __init__(
        self,
        config: CsrfConfig | None = None,
        cipher: CookieCipher | None = None,
        *,
        verify_header: bool = False,
        enforce_header: bool = False,
        header_name: str = HEADER_NAME,
        extra_filters: list[WebFilter] | None = None,
    ) -> None:
        self.config = config or CsrfConfig()
        if cipher is None:
            logger.warning("csrf_ephemeral_cookie_key")
            cipher = CookieCipher.generate()
        self.cipher = cipher
        self._verify_header = verify_header or enforce_header
        self._enforce_header = enforce_header
        self._header_name = header_name
        self._extra_filters = list(extra_filters or [])

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> CsrfProtection:
        """Build from the ``flycsrf.csrf`` configuration section."""
        props = config.bind(CsrfProperties)
        cipher = CookieCipher(props.secret_key) if props.secret_key else None
        return cls(
            CsrfConfig.from_properties(props),
            cipher,
            verify_header=props.verify_header,
            enforce_header=props.enforce_header,
            header_name=props.header_name,
            **kwargs,
        )

    def filters(self) -> list[WebFilter]:
        filters: list[WebFilter] = [CsrfFilter(self.config, self.cipher)]
        if self._verify_header:
            filters.append(
                CsrfHeaderFilter(self.config, header_name=self._header_name, enforce=self._enforce_header)
            )
        return filters + self._extra_filters

    def middleware(self) -> Middleware:
        """Middleware entry for ``Starlette(middleware=[...])``."""
        return Middleware(WebFilterChainMiddleware, filters=self.filters())

    def install(self, app: Starlette) -> Starlette:
        """Register the config as app state, the filter chain and the error handler."""
        app.state.csrf_config = self.config
        app.add_middleware(WebFilterChainMiddleware, filters=self.filters())
        app.add_exception_handler(FlyCsrfException, csrf_exception_handler)
        logger.info(
            "csrf_protection_installed",
            cookie_name=self.config.cookie_name,
            cookie_length=self.config.cookie_length,
            verify_header=self._verify_header,
            enforce_header=self._enforce_header,
        )
        return app
