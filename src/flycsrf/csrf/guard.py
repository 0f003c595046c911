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
"""TokenRequestExtractor — derives the request's CsrfToken on demand.

Extraction does not raise. It returns a :class:`GuardOutcome`, which the
dispatching code inspects explicitly.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

import structlog

from flycsrf.csrf.config import CsrfConfig
from flycsrf.csrf.ports.cookies import CookieJar
from flycsrf.csrf.store import SessionSecretStore
from flycsrf.csrf.token import AuthenticityTokenMinter, CsrfToken
from flycsrf.kernel.exceptions import CsrfTokenMissingException, FlyCsrfException

logger = structlog.get_logger("flycsrf.csrf")

T = TypeVar("T")


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    FORWARD = "forward"


@dataclass(frozen=True)
class GuardOutcome(Generic[T]):
    """Result of evaluating a request guard.

    ``SUCCESS`` carries a value, ``FAILURE`` carries an HTTP status and the
    error describing it, ``FORWARD`` means the guard does not apply and
    the next candidate handler may be tried.
    """

    kind: OutcomeKind
    value: T | None = None
    status: int | None = None
    error: FlyCsrfException | None = None

    @classmethod
    def success(cls, value: T) -> GuardOutcome[T]:
        return cls(OutcomeKind.SUCCESS, value=value)

    @classmethod
    def failure(cls, status: int, error: FlyCsrfException) -> GuardOutcome[T]:
        return cls(OutcomeKind.FAILURE, status=status, error=error)

    @classmethod
    def forward(cls) -> GuardOutcome[T]:
        return cls(OutcomeKind.FORWARD)

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.kind is OutcomeKind.FAILURE

    @property
    def is_forward(self) -> bool:
        return self.kind is OutcomeKind.FORWARD


class TokenRequestExtractor:
    """Builds a :class:`CsrfToken` from the session secret in a cookie jar.

    A missing, malformed or too-short secret is a hard stop: the outcome is
    a 403 failure, never a forward.
    """

    def __init__(
        self,
        store: SessionSecretStore | None = None,
        minter: AuthenticityTokenMinter | None = None,
    ) -> None:
        self._store = store or SessionSecretStore()
        self._minter = minter

    def extract(self, jar: CookieJar | None, config: CsrfConfig | None) -> GuardOutcome[CsrfToken]:
        if config is None or jar is None:
            logger.error("csrf_config_missing", stage="extract")
            return GuardOutcome.failure(403, CsrfTokenMissingException("CSRF protection is not configured"))

        raw = self._store.read(jar, config)
        if raw is None:
            logger.warning("csrf_session_secret_missing", cookie_name=config.cookie_name)
            return GuardOutcome.failure(403, CsrfTokenMissingException())

        minter = self._minter or AuthenticityTokenMinter(rounds=config.hash_rounds)
        return GuardOutcome.success(CsrfToken(self._store.encoded(raw), minter))
