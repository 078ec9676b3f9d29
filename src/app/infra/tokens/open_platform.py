"""Tokens do Open Platform Douyin (envelope `data.*`)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.credential import Credential
from app.infra.tokens.base import CachedAccessToken, dig, join_url
from config.settings.douyin import DEVELOPER_API_BASE_URL, OPEN_API_BASE_URL, SANDBOX_API_BASE_URL

if TYPE_CHECKING:
    from app.protocols.cache import CredentialCacheProtocol
    from app.protocols.http_client import TransportProtocol

DEFAULT_CLIENT_TOKEN_SCOPE = "ma.clientToken"


class OpenPlatformAccessToken(CachedAccessToken):
    """client_credential via POST JSON `api/apps/v2/token`."""

    def __init__(
        self,
        app_id: str,
        secret: str,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        scope: str = DEFAULT_CLIENT_TOKEN_SCOPE,
        is_sandbox: bool = False,
        safety_margin_seconds: int = 0,
    ) -> None:
        super().__init__(cache, http_client, safety_margin_seconds=safety_margin_seconds)
        self._app_id = app_id
        self._secret = secret
        self._scope = scope
        self._base_url = SANDBOX_API_BASE_URL if is_sandbox else DEVELOPER_API_BASE_URL

    def get_key(self) -> str:
        return f"douyin_open_platform.access_token.{self._app_id}.{self._secret}.{self._scope}"

    async def _exchange(self) -> Credential:
        response = await self._http.request(
            "POST",
            join_url(self._base_url, "api/apps/v2/token"),
            json={
                "grant_type": "client_credential",
                "scope": self._scope,
                "appid": self._app_id,
                "secret": self._secret,
            },
        )
        payload = response.to_dict(strict=False)
        return self._credential(
            response,
            dig(payload, "data", "access_token"),
            dig(payload, "data", "expires_in"),
        )


class OauthClientToken(CachedAccessToken):
    """client_token via POST JSON `oauth/client_token/`."""

    def __init__(
        self,
        client_key: str,
        client_secret: str,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        is_sandbox: bool = False,
        safety_margin_seconds: int = 0,
    ) -> None:
        super().__init__(cache, http_client, safety_margin_seconds=safety_margin_seconds)
        self._client_key = client_key
        self._client_secret = client_secret
        self._base_url = SANDBOX_API_BASE_URL if is_sandbox else OPEN_API_BASE_URL

    def get_key(self) -> str:
        return f"douyin_open_platform.oauth.client_token.{self._client_key}.{self._client_secret}"

    async def _exchange(self) -> Credential:
        response = await self._http.request(
            "POST",
            join_url(self._base_url, "oauth/client_token/"),
            json={
                "grant_type": "client_credential",
                "client_key": self._client_key,
                "client_secret": self._client_secret,
            },
        )
        payload = response.to_dict(strict=False)
        return self._credential(
            response,
            dig(payload, "data", "access_token"),
            dig(payload, "data", "expires_in"),
        )
