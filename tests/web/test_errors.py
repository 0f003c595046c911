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
"""Tests for the FlyCSRF JSON error rendering."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from flycsrf.kernel.exceptions import (
    CsrfTokenMissingException,
    FlyCsrfException,
    SecurityException,
    TokenHashError,
    VerificationFailure,
)
from flycsrf.web.adapters.starlette.errors import csrf_exception_handler, error_response, status_for


def _request(path: str = "/comments") -> SimpleNamespace:
    return SimpleNamespace(url=SimpleNamespace(path=path), state=SimpleNamespace())


class TestStatusFor:
    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (VerificationFailure(), 403),
            (CsrfTokenMissingException(), 403),
            (SecurityException("nope"), 401),
            (TokenHashError("bad rounds"), 502),
            (FlyCsrfException("other"), 500),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_mapping(self, exc, status):
        assert status_for(exc) == status


class TestErrorResponse:
    def test_body(self):
        response = error_response(_request(), VerificationFailure(context={"field": "authenticity_token"}))

        body = json.loads(response.body)
        assert response.status_code == 403
        assert body["error"]["code"] == "CSRF_VERIFICATION_FAILED"
        assert body["error"]["message"] == "CSRF token verification failed!"
        assert body["error"]["status"] == 403
        assert body["error"]["path"] == "/comments"
        assert body["error"]["context"] == {"field": "authenticity_token"}
        assert "timestamp" in body["error"]

    def test_explicit_status(self):
        assert error_response(_request(), TokenHashError("x"), 500).status_code == 500

    @pytest.mark.asyncio
    async def test_handler_renders_library_errors(self):
        response = await csrf_exception_handler(_request(), CsrfTokenMissingException())
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_handler_reraises_foreign_errors(self):
        with pytest.raises(RuntimeError):
            await csrf_exception_handler(_request(), RuntimeError("boom"))
