"""Testes do token do mini-program (envelope no topo)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.tokens import MiniProgramAccessToken
from tests.fakes.fake_transport import RecordingTransport
from utils.errors import HttpError


def _cache(stored: str | None = None) -> MagicMock:
    cache = MagicMock()
    cache.get = AsyncMock(return_value=stored)
    cache.set = AsyncMock()
    return cache


class TestMiniProgramAccessToken:
    def test_key_distinguishes_stable_mode(self) -> None:
        normal = MiniProgramAccessToken("app", "sec", _cache(), RecordingTransport())
        stable = MiniProgramAccessToken("app", "sec", _cache(), RecordingTransport(), use_stable_token=True)

        assert normal.get_key() == "mini_app.access_token.app.sec.0"
        assert stable.get_key() == "mini_app.access_token.app.sec.1"

    @pytest.mark.asyncio
    async def test_normal_mode_uses_query_string_get(self) -> None:
        transport = RecordingTransport({"access_token": "T", "expires_in": 7200})
        cache = _cache()
        token = MiniProgramAccessToken("app", "sec", cache, transport)

        assert await token.get_token() == "T"

        request = transport.last
        assert request.method == "GET"
        assert request.url.path == "/cgi-bin/token"
        assert dict(request.url.params) == {
            "grant_type": "client_credential",
            "appid": "app",
            "secret": "sec",
        }
        assert cache.set.await_args.args[1:] == ("T", 7200)

    @pytest.mark.asyncio
    async def test_stable_mode_get_does_not_force(self) -> None:
        transport = RecordingTransport({"access_token": "S", "expires_in": 7200})
        token = MiniProgramAccessToken("app", "sec", _cache(), transport, use_stable_token=True)

        await token.get_token()

        assert str(transport.last.url) == "https://developer.toutiao.com/cgi-bin/stable_token"
        assert transport.last_json()["force_refresh"] is False

    @pytest.mark.asyncio
    async def test_stable_mode_refresh_forces(self) -> None:
        transport = RecordingTransport({"access_token": "S", "expires_in": 7200})
        token = MiniProgramAccessToken("app", "sec", _cache(), transport, use_stable_token=True)

        await token.refresh()

        assert transport.last_json()["force_refresh"] is True

    @pytest.mark.asyncio
    async def test_data_envelope_is_not_accepted(self) -> None:
        """Este endpoint devolve o token no topo; `data.access_token` não conta."""
        transport = RecordingTransport({"data": {"access_token": "T"}})
        token = MiniProgramAccessToken("app", "sec", _cache(), transport)

        with pytest.raises(HttpError):
            await token.refresh()
