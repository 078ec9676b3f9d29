"""Testes do provedor OAuth Douyin."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from app.infra.oauth import DouyinOAuth
from tests.fakes.fake_transport import RecordingTransport
from utils.errors import AuthorizeFailedError, ConfigError

TOKEN_BODY = {
    "data": {
        "access_token": "act",
        "open_id": "oid",
        "refresh_token": "rft",
        "expires_in": 1296000,
        "scope": "user_info",
    },
    "message": "success",
}
USER_BODY = {
    "data": {
        "open_id": "oid",
        "union_id": "uid",
        "nickname": "Douyin User",
        "avatar": "https://p3.douyinpic.com/a.jpeg",
        "e_account_role": "",
    }
}


def _oauth(transport: RecordingTransport, **kwargs) -> DouyinOAuth:
    return DouyinOAuth("ck", "cs", transport, redirect_url="https://example.test/cb", **kwargs)


class TestRedirect:
    def test_authorize_url(self) -> None:
        url = _oauth(RecordingTransport(), scopes=("user_info", "video.list")).redirect("xyz")

        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://open.douyin.com/platform/oauth/connect/"
        assert parse_qs(parts.query) == {
            "client_key": ["ck"],
            "redirect_uri": ["https://example.test/cb"],
            "scope": ["user_info,video.list"],
            "response_type": ["code"],
            "state": ["xyz"],
        }

    def test_requires_redirect_url(self) -> None:
        with pytest.raises(ConfigError):
            DouyinOAuth("ck", "cs", RecordingTransport()).redirect()


class TestTokenExchange:
    @pytest.mark.asyncio
    async def test_token_from_code_posts_form(self) -> None:
        transport = RecordingTransport(TOKEN_BODY)

        token = await _oauth(transport).token_from_code("the-code")

        assert token["access_token"] == "act"
        assert transport.last.url.path == "/oauth/access_token/"
        assert parse_qs(transport.last.content.decode()) == {
            "client_key": ["ck"],
            "client_secret": ["cs"],
            "code": ["the-code"],
            "grant_type": ["authorization_code"],
        }

    @pytest.mark.asyncio
    async def test_missing_access_token_raises_authorize_failed(self) -> None:
        body = {"data": {"error_code": 10008, "description": "code expired"}}
        with pytest.raises(AuthorizeFailedError) as exc_info:
            await _oauth(RecordingTransport(body)).token_from_code("old")
        assert exc_info.value.body == body


class TestUser:
    @pytest.mark.asyncio
    async def test_user_from_code(self) -> None:
        transport = RecordingTransport(TOKEN_BODY, USER_BODY)

        user = await _oauth(transport).user_from_code("the-code")

        assert user.open_id == "oid"
        assert user.union_id == "uid"
        assert user.nickname == "Douyin User"
        assert user.access_token == "act"
        assert user.refresh_token == "rft"
        assert user.expires_in == 1296000
        assert user.extra == {"e_account_role": ""}
        assert parse_qs(transport.last.content.decode()) == {
            "access_token": ["act"],
            "open_id": ["oid"],
        }
