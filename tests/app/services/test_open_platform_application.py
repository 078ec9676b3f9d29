"""Testes da OpenPlatformApplication (composição, tickets e authorizers)."""

from __future__ import annotations

import pytest

from app.domain import Authorization, OpenPlatformAccount
from app.infra.oauth import DouyinOAuth
from app.infra.tokens import StaticAccessToken
from app.services import MiniProgramApplication, OpenPlatformApplication
from tests.fakes.fake_transport import RecordingTransport
from utils.errors import ConfigError, HttpError

ACCOUNT = OpenPlatformAccount(
    app_id="component",
    secret="sec",
    token="tok",
    aes_key="0123456789abcdef",
)


def _app(transport: RecordingTransport, memory_cache, account: OpenPlatformAccount = ACCOUNT) -> OpenPlatformApplication:
    return OpenPlatformApplication(account, memory_cache, transport)


class TestComposition:
    def test_codec_and_server_are_reused(self, memory_cache) -> None:
        app = _app(RecordingTransport(), memory_cache)

        assert app.get_codec() is app.get_codec()
        assert app.get_server() is app.get_server()
        assert app.get_server().codec is app.get_codec()

    def test_codec_requires_aes_key(self, memory_cache) -> None:
        account = OpenPlatformAccount(app_id="component", secret="sec", token="tok")

        with pytest.raises(ConfigError, match="aes_key"):
            _app(RecordingTransport(), memory_cache, account).get_codec()

    def test_access_token_requires_secret(self, memory_cache) -> None:
        account = OpenPlatformAccount(app_id="component", secret=None)

        with pytest.raises(ConfigError, match="secret"):
            _app(RecordingTransport(), memory_cache, account).get_access_token()

    def test_sandbox_base_url(self, memory_cache) -> None:
        account = OpenPlatformAccount(app_id="component", secret="sec", is_sandbox=True)

        assert _app(RecordingTransport(), memory_cache, account).api_base_url == "https://open-sandbox.douyin.com/"

    def test_oauth_factory_must_return_provider(self, memory_cache) -> None:
        app = _app(RecordingTransport(), memory_cache).set_oauth_factory(lambda _: object())

        with pytest.raises(TypeError):
            app.get_oauth()

    def test_default_oauth_provider(self, memory_cache) -> None:
        assert isinstance(_app(RecordingTransport(), memory_cache).get_oauth(), DouyinOAuth)


class TestCreateClient:
    @pytest.mark.asyncio
    async def test_token_is_sent_as_query(self, memory_cache) -> None:
        transport = RecordingTransport(
            {"err_no": 0, "data": {"access_token": "CT", "expires_in": 7200}},
            {"errcode": 0, "data": {"ok": True}},
        )
        client = _app(transport, memory_cache).create_client()

        response = await client.get("api/apps/qrcode")

        assert response.to_dict() == {"errcode": 0, "data": {"ok": True}}
        assert str(transport.requests[0].url) == "https://developer.toutiao.com/api/apps/v2/token"
        assert transport.last.url.host == "open.douyin.com"
        assert transport.last.url.params["access_token"] == "CT"

    @pytest.mark.asyncio
    async def test_errcode_raises(self, memory_cache) -> None:
        transport = RecordingTransport(
            {"data": {"access_token": "CT", "expires_in": 7200}},
            {"errcode": 40001, "errmsg": "invalid"},
        )

        with pytest.raises(HttpError, match="Request failed"):
            await _app(transport, memory_cache).create_client().get("api/apps/qrcode")


class TestJsbTicket:
    @pytest.mark.asyncio
    async def test_ticket_uses_client_token_header(self, memory_cache) -> None:
        transport = RecordingTransport(
            {"data": {"access_token": "OCT", "expires_in": 7200}},
            {"data": {"ticket": "jsb", "expires_in": 7200}},
        )

        ticket = await _app(transport, memory_cache).get_jsb_ticket()

        assert ticket == "jsb"
        assert str(transport.requests[0].url) == "https://open.douyin.com/oauth/client_token/"
        request = transport.last
        assert request.url.path == "/js/getticket"
        assert request.url.params["Scope"] == "js.ticket"
        assert request.headers["access-token"] == "OCT"
        assert "access_token" not in request.url.params

    @pytest.mark.asyncio
    async def test_missing_ticket_raises(self, memory_cache) -> None:
        transport = RecordingTransport({"data": {"error_code": 1}})

        with pytest.raises(HttpError, match="Failed to get ticket"):
            await _app(transport, memory_cache).get_jsb_ticket(StaticAccessToken("component", "OCT"))

    @pytest.mark.asyncio
    async def test_client_token_is_separate_from_access_token(self, memory_cache) -> None:
        app = _app(RecordingTransport(), memory_cache)

        assert app.get_oauth_client_token().get_key() != app.get_access_token().get_key()


class TestAuthorizer:
    @pytest.mark.asyncio
    async def test_authorizer_token_is_exchanged_and_cached(self, memory_cache) -> None:
        transport = RecordingTransport(
            {"data": {"access_token": "CT", "expires_in": 7200}},
            {"authorizer_access_token": "AAT", "expires_in": 7200, "authorizer_refresh_token": "r2"},
        )
        app = _app(transport, memory_cache)

        assert await app.get_authorizer_access_token("authorizer", "r1") == "AAT"
        assert await app.get_authorizer_access_token("authorizer", "r1") == "AAT"

        assert len(transport.requests) == 2
        request = transport.last
        assert request.url.path == "/cgi-bin/component/api_authorizer_token"
        assert request.url.params["access_token"] == "CT"
        assert transport.last_json() == {
            "component_appid": "component",
            "authorizer_appid": "authorizer",
            "authorizer_refresh_token": "r1",
        }

    @pytest.mark.asyncio
    async def test_refresh_authorizer_token_returns_payload(self, memory_cache) -> None:
        payload = {"authorizer_access_token": "AAT", "expires_in": 7200}
        transport = RecordingTransport({"data": {"access_token": "CT", "expires_in": 7200}}, payload)

        assert await _app(transport, memory_cache).refresh_authorizer_token("authorizer", "r1") == payload

    @pytest.mark.asyncio
    async def test_refresh_authorizer_token_without_token_raises(self, memory_cache) -> None:
        transport = RecordingTransport({"data": {"access_token": "CT", "expires_in": 7200}}, {"errcode": 0})

        with pytest.raises(HttpError, match="authorizer_access_token"):
            await _app(transport, memory_cache).refresh_authorizer_token("authorizer", "r1")


class TestMiniProgramFromComponent:
    def test_mini_program_reuses_component_codec(self, memory_cache) -> None:
        app = _app(RecordingTransport(), memory_cache)

        mini = app.get_mini_program_with_access_token("mini", "AAT")

        assert isinstance(mini, MiniProgramApplication)
        assert mini.account.app_id == "mini"
        assert mini.get_codec() is app.get_codec()

    @pytest.mark.asyncio
    async def test_mini_program_from_authorization(self, memory_cache) -> None:
        transport = RecordingTransport({"errcode": 0})
        authorization = Authorization(
            authorization_info={"authorizer_appid": "mini", "authorizer_access_token": "AAT"}
        )
        mini = _app(transport, memory_cache).get_mini_program_with_authorization(authorization)

        await mini.create_client().get("api/apps/qrcode")

        assert transport.last.url.params["access_token"] == "AAT"
        assert transport.last.url.host == "developer.toutiao.com"

    def test_mini_program_with_refresh_token_uses_authorizer_source(self, memory_cache) -> None:
        mini = _app(RecordingTransport(), memory_cache).get_mini_program_with_refresh_token("mini", "r1")

        assert mini.get_access_token().get_key().startswith("open_platform.authorizer_access_token.mini.")
