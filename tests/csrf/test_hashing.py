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
"""Tests for TokenEncoder protocol and BcryptTokenEncoder adapter."""

from __future__ import annotations

import base64
import hashlib

import bcrypt
import pytest

from flycsrf.csrf.hashing import BcryptTokenEncoder, TokenEncoder


class TestBcryptTokenEncoder:
    def test_hash_produces_bcrypt_output(self):
        digest = BcryptTokenEncoder().hash("c2VjcmV0", 4)
        assert digest.startswith("$2b$04$")

    def test_verify_correct_secret(self):
        encoder = BcryptTokenEncoder()
        assert encoder.verify("c2VjcmV0", encoder.hash("c2VjcmV0", 4)) is True

    def test_verify_wrong_secret(self):
        encoder = BcryptTokenEncoder()
        assert encoder.verify("b3RoZXI=", encoder.hash("c2VjcmV0", 4)) is False

    def test_same_secret_different_hashes(self):
        encoder = BcryptTokenEncoder()
        assert encoder.hash("same", 4) != encoder.hash("same", 4)

    def test_secrets_longer_than_72_bytes(self):
        encoder = BcryptTokenEncoder()
        long_secret = "A" * 88
        digest = encoder.hash(long_secret, 4)
        assert encoder.verify(long_secret, digest) is True
        # differs only after byte 72
        assert encoder.verify("A" * 80 + "B" * 8, digest) is False

    def test_digest_is_bcrypt_of_sha256_prehash(self):
        encoded = "c2VjcmV0"
        digest = BcryptTokenEncoder().hash(encoded, 4).encode("ascii")

        prehashed = base64.b64encode(hashlib.sha256(encoded.encode()).digest())
        assert bcrypt.checkpw(prehashed, digest) is True
        assert bcrypt.checkpw(encoded.encode(), digest) is False

    def test_invalid_rounds(self):
        with pytest.raises(ValueError):
            BcryptTokenEncoder().hash("secret", 3)

    def test_protocol_conformance(self):
        assert isinstance(BcryptTokenEncoder(), TokenEncoder)
