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
"""Authenticity tokens — minting and verification against the session secret.

A session secret never leaves the server in the clear. Pages embed an
*authenticity token* instead: a salted bcrypt hash of the encoded secret.
Minting twice yields two different tokens, and both verify against the
same secret. Verification always compares against the secret of the
*current* session, never against a remembered token.
"""

from __future__ import annotations

import secrets

import structlog

from flycsrf.csrf.config import DEFAULT_HASH_ROUNDS
from flycsrf.csrf.hashing import BcryptTokenEncoder, TokenEncoder
from flycsrf.kernel.exceptions import TokenHashError, VerificationFailure

logger = structlog.get_logger("flycsrf.csrf")

PARAM_NAME = "authenticity_token"
"""Form field that carries the authenticity token."""

HEADER_NAME = "X-CSRF-Token"
"""Request header that carries the authenticity token for AJAX requests."""


class AuthenticityTokenMinter:
    """Derives authenticity tokens from session secrets and checks them.

    Hashing is CPU-bound and blocks the caller for the duration of the
    work factor; async callers should run it in a thread pool.

    Args:
        rounds: bcrypt work factor (default 8, chosen for response latency).
        encoder: Hashing primitive; bcrypt unless overridden.
    """

    def __init__(self, rounds: int = DEFAULT_HASH_ROUNDS, encoder: TokenEncoder | None = None) -> None:
        self._rounds = rounds
        self._encoder = encoder or BcryptTokenEncoder()

    @property
    def rounds(self) -> int:
        return self._rounds

    def mint(self, secret: str) -> str:
        """Return a fresh authenticity token for the encoded *secret*.

        Raises:
            TokenHashError: If the hashing primitive rejects its parameters.
        """
        try:
            return self._encoder.hash(secret, self._rounds)
        except ValueError as exc:
            raise TokenHashError(
                f"Failed to mint authenticity token: {exc}",
                context={"rounds": self._rounds},
            ) from exc

    def verify(self, secret: str, submitted: str) -> None:
        """Check *submitted* against the encoded *secret*.

        Any error raised by the primitive counts as a mismatch.

        Raises:
            VerificationFailure: If *submitted* was not minted from *secret*.
        """
        if not self.matches(secret, submitted):
            raise VerificationFailure()
        logger.info("csrf_token_verified")

    def matches(self, secret: str, submitted: str) -> bool:
        """Boolean form of :meth:`verify`."""
        if not secret or not submitted:
            return False
        try:
            return self._encoder.verify(secret, submitted)
        except (ValueError, TypeError, UnicodeError):
            return False


class CsrfToken:
    """The current request's session secret, in its encoded form.

    Handlers receive a CsrfToken from the request extractor and use it to
    mint authenticity tokens for pages or to verify submitted ones. The
    value is masked in ``repr`` so it does not end up in logs.
    """

    __slots__ = ("_value", "_minter")

    def __init__(self, value: str, minter: AuthenticityTokenMinter | None = None) -> None:
        self._value = value
        self._minter = minter or AuthenticityTokenMinter()

    @classmethod
    def empty(cls) -> CsrfToken:
        """Placeholder for a request without an established secret."""
        return cls("")

    @property
    def value(self) -> str:
        return self._value

    @property
    def is_empty(self) -> bool:
        return not self._value

    def authenticity_token(self) -> str:
        """Mint an authenticity token for embedding in a form or page."""
        return self._minter.mint(self._value)

    def verify(self, submitted: str) -> None:
        """Raise :class:`VerificationFailure` unless *submitted* matches this session."""
        self._minter.verify(self._value, submitted)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CsrfToken):
            return NotImplemented
        return secrets.compare_digest(self._value, other._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return "CsrfToken(***)" if self._value else "CsrfToken(<empty>)"
