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
"""Tests for CsrfFilter — issuing the session secret cookie."""

from __future__ import annotations

import base64
import os
from http.cookies import SimpleCookie
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from starlette.responses import Response
from structlog.testing import capture_logs

from flycsrf.csrf.config import CsrfConfig
from flycsrf.web.adapters.starlette.filters.csrf_filter import CsrfFilter


def _make_request(cookies: dict[str, str] | None = None, app=None) -> SimpleNamespace:
    return SimpleNamespace(
        method="GET",
        url=SimpleNamespace(path="/"),
        cookies=cookies or {},
        headers={},
        state=SimpleNamespace(),
        app=app,
    )


def _set_cookies(response: Response) -> SimpleCookie:
    parsed: SimpleCookie = SimpleCookie()
    for header in response.headers.getlist("set-cookie"):
        parsed.load(header)
    return parsed


def _sealed_secret(cipher, length: int) -> str:
    return cipher.seal(base64.b64encode(os.urandom(length)).decode())


class TestCsrfFilter:
    @pytest.mark.asyncio
    async def test_fresh_request_gets_cookie(self, cipher):
        csrf_filter = CsrfFilter(CsrfConfig(), cipher)
        request = _make_request()
        call_next = AsyncMock(return_value=Response("ok"))

        result = await csrf_filter.do_filter(request, call_next)

        call_next.assert_awaited_once_with(request)
        morsel = _set_cookies(result)["csrf_token"]
        raw = base64.b64decode(cipher.unseal(morsel.value))
        assert len(raw) == 32

    @pytest.mark.asyncio
    @pytest.mark.parametrize("length", [1, 16, 32, 64])
    async def test_cookie_length_matches_config(self, cipher, length):
        csrf_filter = CsrfFilter(CsrfConfig().with_cookie_length(length), cipher)
        result = await csrf_filter.do_filter(_make_request(), AsyncMock(return_value=Response("ok")))

        morsel = _set_cookies(result)["csrf_token"]
        assert len(base64.b64decode(cipher.unseal(morsel.value))) == length

    @pytest.mark.asyncio
    async def test_existing_valid_secret_is_kept(self, cipher):
        csrf_filter = CsrfFilter(CsrfConfig(), cipher)
        request = _make_request({"csrf_token": _sealed_secret(cipher, 32)})

        result = await csrf_filter.do_filter(request, AsyncMock(return_value=Response("ok")))

        assert result.headers.getlist("set-cookie") == []

    @pytest.mark.asyncio
    async def test_longer_secret_is_kept(self, cipher):
        csrf_filter = CsrfFilter(CsrfConfig(), cipher)
        request = _make_request({"csrf_token": _sealed_secret(cipher, 48)})

        result = await csrf_filter.do_filter(request, AsyncMock(return_value=Response("ok")))

        assert result.headers.getlist("set-cookie") == []

    @pytest.mark.asyncio
    async def test_short_secret_is_replaced(self, cipher):
        csrf_filter = CsrfFilter(CsrfConfig(), cipher)
        request = _make_request({"csrf_token": _sealed_secret(cipher, 31)})

        result = await csrf_filter.do_filter(request, AsyncMock(return_value=Response("ok")))

        morsel = _set_cookies(result)["csrf_token"]
        assert len(base64.b64decode(cipher.unseal(morsel.value))) == 32

    @pytest.mark.asyncio
    async def test_unsealed_cookie_is_replaced(self, cipher):
        forged = base64.b64encode(os.urandom(32)).decode()
        csrf_filter = CsrfFilter(CsrfConfig(), cipher)

        result = await csrf_filter.do_filter(
            _make_request({"csrf_token": forged}), AsyncMock(return_value=Response("ok"))
        )

        assert "csrf_token" in _set_cookies(result)

    @pytest.mark.asyncio
    async def test_state_exposes_jar_and_config(self, cipher):
        config = CsrfConfig()
        request = _make_request()
        await CsrfFilter(config, cipher).do_filter(request, AsyncMock(return_value=Response("ok")))

        assert request.state.csrf_config is config
        assert request.state.csrf_cookies.get_private("csrf_token") is not None

    @pytest.mark.asyncio
    async def test_config_from_app_state(self, cipher):
        config = CsrfConfig().with_cookie_name("managed")
        app = SimpleNamespace(state=SimpleNamespace(csrf_config=config))

        result = await CsrfFilter(None, cipher).do_filter(
            _make_request(app=app), AsyncMock(return_value=Response("ok"))
        )

        assert "managed" in _set_cookies(result)

    @pytest.mark.asyncio
    async def test_missing_config_logs_and_continues(self, cipher):
        request = _make_request()
        call_next = AsyncMock(return_value=Response("ok"))

        with capture_logs() as logs:
            result = await CsrfFilter(None, cipher).do_filter(request, call_next)

        call_next.assert_awaited_once_with(request)
        assert result.status_code == 200
        assert result.headers.getlist("set-cookie") == []
        assert any(entry["event"] == "csrf_config_missing" for entry in logs)

    @pytest.mark.asyncio
    async def test_cookie_event_does_not_log_secret(self, cipher):
        with capture_logs() as logs:
            result = await CsrfFilter(CsrfConfig(), cipher).do_filter(
                _make_request(), AsyncMock(return_value=Response("ok"))
            )

        value = cipher.unseal(_set_cookies(result)["csrf_token"].value)
        added = [entry for entry in logs if entry["event"] == "csrf_cookie_added"]
        assert len(added) == 1
        assert value not in repr(added)


class TestEnsureSecret:
    def test_returns_true_only_when_minting(self, jar, cipher):
        csrf_filter = CsrfFilter(CsrfConfig(), cipher)
        assert csrf_filter.ensure_secret(jar, CsrfConfig()) is True
        assert csrf_filter.ensure_secret(jar, CsrfConfig()) is False
        assert len(jar.added) == 1


class TestWeakCookieLength:
    def test_short_cookie_length_logged_once_at_construction(self, cipher):
        config = CsrfConfig().with_cookie_length(8).with_cookie_name("short").with_hash_rounds(4)

        with capture_logs() as logs:
            CsrfFilter(config, cipher)

        weak = [entry for entry in logs if entry["event"] == "csrf_cookie_length_weak"]
        assert len(weak) == 1
        assert weak[0]["cookie_length"] == 8
        assert weak[0]["log_level"] == "warning"

    def test_recommended_length_not_logged(self, cipher):
        with capture_logs() as logs:
            CsrfFilter(CsrfConfig(), cipher)
        assert logs == []
