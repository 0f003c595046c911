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
"""Random session secrets and their cookie-safe encoding."""

from __future__ import annotations

import base64
import binascii
import secrets


class RandomSecretGenerator:
    """Produces session secrets from the operating system CSPRNG.

    There is no recovery path: if the OS cannot supply entropy the
    underlying ``OSError`` propagates to the caller.
    """

    def generate(self, length: int) -> bytes:
        if length < 1:
            raise ValueError(f"secret length must be positive, got {length}")
        return secrets.token_bytes(length)


class SecretCodec:
    """Standard base64 encoding of raw secrets (with padding)."""

    @staticmethod
    def encode(raw: bytes) -> str:
        return base64.b64encode(raw).decode("ascii")

    @staticmethod
    def decode(encoded: str) -> bytes | None:
        """Decode *encoded*, or return ``None`` when it is not valid base64."""
        try:
            return base64.b64decode(encoded.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError):
            return None
