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
"""CsrfConfig — immutable settings shared by every request of a process.

``CsrfConfig`` is built once at startup, either with the ``with_*``
builders or from file/env configuration through :class:`CsrfProperties`,
and then handed to the filters that need it.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flycsrf.core.config import Config, config_properties

DEFAULT_LIFESPAN = timedelta(days=1)
DEFAULT_COOKIE_NAME = "csrf_token"
DEFAULT_COOKIE_LENGTH = 32
DEFAULT_HASH_ROUNDS = 8

MIN_RECOMMENDED_COOKIE_LENGTH = 16
"""Secrets shorter than this are accepted, but CsrfFilter logs them as weak."""

_NULL_STRINGS = frozenset({"", "null", "none", "~"})


@dataclass(frozen=True)
class CsrfConfig:
    """Configuration for CSRF session secrets and authenticity tokens.

    Attributes:
        lifespan: How long the secret cookie lives. ``None`` issues a
            browser-session cookie with no expiration timestamp.
        cookie_name: Name of the private cookie carrying the secret.
        cookie_length: Number of random bytes in a session secret.
        hash_rounds: bcrypt work factor used when minting authenticity tokens.
        strict_length: When ``True``, a stored secret must be exactly
            ``cookie_length`` bytes; otherwise longer secrets are accepted.
        secure_cookie: Mark the secret cookie ``Secure`` (HTTPS only).
    """

    lifespan: timedelta | None = DEFAULT_LIFESPAN
    cookie_name: str = DEFAULT_COOKIE_NAME
    cookie_length: int = DEFAULT_COOKIE_LENGTH
    hash_rounds: int = DEFAULT_HASH_ROUNDS
    strict_length: bool = False
    secure_cookie: bool = False

    def __post_init__(self) -> None:
        if self.cookie_length < 1:
            raise ValueError(f"cookie_length must be a positive number of bytes, got {self.cookie_length}")
        if not self.cookie_name:
            raise ValueError("cookie_name must not be empty")

    def with_lifetime(self, lifespan: timedelta | None) -> CsrfConfig:
        return dataclasses.replace(self, lifespan=lifespan)

    def with_cookie_name(self, name: str) -> CsrfConfig:
        return dataclasses.replace(self, cookie_name=name)

    def with_cookie_length(self, length: int) -> CsrfConfig:
        """Set the secret length in bytes. Use 16 or more."""
        return dataclasses.replace(self, cookie_length=length)

    def with_hash_rounds(self, rounds: int) -> CsrfConfig:
        return dataclasses.replace(self, hash_rounds=rounds)

    def with_strict_length(self, strict: bool = True) -> CsrfConfig:
        return dataclasses.replace(self, strict_length=strict)

    def with_secure_cookie(self, secure: bool = True) -> CsrfConfig:
        return dataclasses.replace(self, secure_cookie=secure)

    def accepts_length(self, length: int) -> bool:
        """Whether a decoded secret of *length* bytes is usable under this config."""
        if self.strict_length:
            return length == self.cookie_length
        return length >= self.cookie_length

    @classmethod
    def from_properties(cls, props: CsrfProperties) -> CsrfConfig:
        return cls(
            lifespan=props.lifespan,
            cookie_name=props.cookie_name,
            cookie_length=props.cookie_length,
            hash_rounds=props.hash_rounds,
            strict_length=props.strict_length,
            secure_cookie=props.secure_cookie,
        )

    @classmethod
    def from_config(cls, config: Config) -> CsrfConfig:
        """Bind ``flycsrf.csrf`` from *config* and build a CsrfConfig."""
        return cls.from_properties(config.bind(CsrfProperties))


def _hyphenate(name: str) -> str:
    return name.replace("_", "-")


@config_properties(prefix="flycsrf.csrf")
class CsrfProperties(BaseModel):
    """File/env configuration for CSRF protection (``flycsrf.csrf.*``)."""

    model_config = ConfigDict(alias_generator=_hyphenate, populate_by_name=True, frozen=True)

    lifespan: timedelta | None = DEFAULT_LIFESPAN
    cookie_name: str = Field(default=DEFAULT_COOKIE_NAME, min_length=1)
    cookie_length: int = Field(default=DEFAULT_COOKIE_LENGTH, ge=1)
    hash_rounds: int = Field(default=DEFAULT_HASH_ROUNDS, ge=4, le=31)
    strict_length: bool = False
    secure_cookie: bool = False
    header_name: str = Field(default="X-CSRF-Token", min_length=1)
    verify_header: bool = False
    enforce_header: bool = False
    secret_key: str | None = None

    @field_validator("lifespan", mode="before")
    @classmethod
    def _coerce_lifespan(cls, value: object) -> object:
        # env overrides arrive as strings: "3600" is seconds, "null" a session cookie
        if isinstance(value, str):
            text = value.strip()
            if text.lower() in _NULL_STRINGS:
                return None
            if text.isdigit():
                return int(text)
        return value
