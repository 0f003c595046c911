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
"""Token hashing port and bcrypt adapter."""

from __future__ import annotations

import base64
import hashlib
from typing import Protocol, runtime_checkable

import bcrypt as _bcrypt


@runtime_checkable
class TokenEncoder(Protocol):
    """Port for one-way salted hashing of session secrets."""

    def hash(self, secret: str, rounds: int) -> str:
        """Hash *secret* at the given work factor. Returns the digest string."""
        ...

    def verify(self, secret: str, digest: str) -> bool:
        """Check *secret* against *digest*."""
        ...


class BcryptTokenEncoder:
    """TokenEncoder adapter using bcrypt.

    bcrypt only reads the first 72 bytes of its input, and current
    releases reject anything longer. The secret is therefore reduced to a
    base64 SHA-256 digest (44 bytes) before it is hashed, so every byte of
    a long secret contributes to the authenticity token.

    Tokens are therefore not plain ``bcrypt(encoded_secret)`` hashes: a bare
    ``bcrypt.checkpw(encoded_secret, token)`` returns ``False``. Code that
    verifies tokens outside this library must apply the same prehash,
    ``base64(sha256(encoded_secret))``, before calling bcrypt.
    """

    @staticmethod
    def _prehash(secret: str) -> bytes:
        return base64.b64encode(hashlib.sha256(secret.encode("utf-8")).digest())

    def hash(self, secret: str, rounds: int) -> str:
        """Hash *secret* with a fresh salt.

        Raises:
            ValueError: If *rounds* is outside bcrypt's 4..31 range.
        """
        salt = _bcrypt.gensalt(rounds=rounds)
        return _bcrypt.hashpw(self._prehash(secret), salt).decode("ascii")

    def verify(self, secret: str, digest: str) -> bool:
        """Check *secret* against a bcrypt *digest*.

        Raises:
            ValueError: If *digest* is not a well-formed bcrypt hash.
        """
        return _bcrypt.checkpw(self._prehash(secret), digest.encode("ascii"))
