"""Testes dos tokens de authorizer."""

from __future__ import annotations

import hashlib
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.tokens import AuthorizerAccessToken, StaticAccessToken
from tests.fakes.fake_transport import RecordingTransport
from utils.errors import HttpError


def _cache() -> MagicMock:
    cache = MagicMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    return cache


class TestAuthorizerAccessToken:
    def test_key_hashes_refresh_token(self) -> None:
        token = AuthorizerAccessToken("component", "mini", "refresh-xyz", _cache(), RecordingTransport())
        digest = hashlib.md5(b"refresh-xyz").hexdigest()
        assert token.get_key() == f"open_platform.authorizer_access_token.mini.{digest}"

    @pytest.mark.asyncio
    async def test_refresh_applies_500s_margin(self) -> None:
        transport = RecordingTransport({"authorizer_access_token": "AT", "expires_in": 7200})
        cache = _cache()
        token = AuthorizerAccessToken("component", "mini", "rt", cache, transport)

        assert await token.get_token() == "AT"

        assert transport.last_json() == {
            "component_appid": "component",
            "authorizer_appid": "mini",
            "authorizer_refresh_token": "rt",
        }
        assert cache.set.await_args.args[2] == 6700

    @pytest.mark.asyncio
    async def test_default_expires_in(self) -> None:
        cache = _cache()
        token = AuthorizerAccessToken(
            "component", "mini", "rt", cache, RecordingTransport({"authorizer_access_token": "AT"})
        )

        await token.refresh()

        assert cache.set.await_args.args[2] == 6700

    @pytest.mark.asyncio
    async def test_missing_token_raises(self) -> None:
        token = AuthorizerAccessToken(
            "component", "mini", "rt", _cache(), RecordingTransport({"errcode": 61023})
        )
        with pytest.raises(HttpError, match="authorizer_access_token"):
            await token.refresh()


class TestStaticAccessToken:
    @pytest.mark.asyncio
    async def test_returns_fixed_token(self) -> None:
        token = StaticAccessToken("mini", "fixed")
        assert await token.get_token() == "fixed"
        assert await token.to_query() == {"access_token": "fixed"}

    @pytest.mark.asyncio
    async def test_refresh_is_not_supported(self) -> None:
        with pytest.raises(HttpError):
            await StaticAccessToken("mini", "fixed").refresh()
