"""Tokens de authorizer (mini-programs autorizados a um componente)."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from app.domain.credential import Credential
from app.infra.tokens.base import CachedAccessToken, join_url
from config.settings.douyin import OPEN_API_BASE_URL
from utils.errors import HttpError

if TYPE_CHECKING:
    from app.protocols.cache import CredentialCacheProtocol
    from app.protocols.http_client import TransportProtocol

AUTHORIZER_TOKEN_SAFETY_MARGIN = 500
AUTHORIZER_TOKEN_DEFAULT_EXPIRES_IN = 7200


class AuthorizerAccessToken(CachedAccessToken):
    """Token do authorizer renovado via refresh token.

    O transporte deve ser um cliente já autenticado com o token do componente
    (AccessTokenAwareClient).
    """

    token_field = "authorizer_access_token"

    def __init__(
        self,
        component_app_id: str,
        authorizer_app_id: str,
        refresh_token: str,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        base_url: str = OPEN_API_BASE_URL,
        safety_margin_seconds: int = AUTHORIZER_TOKEN_SAFETY_MARGIN,
    ) -> None:
        super().__init__(cache, http_client, safety_margin_seconds=safety_margin_seconds)
        self._component_app_id = component_app_id
        self._authorizer_app_id = authorizer_app_id
        self._refresh_token = refresh_token
        self._base_url = base_url

    @property
    def app_id(self) -> str:
        return self._authorizer_app_id

    def get_key(self) -> str:
        digest = hashlib.md5(self._refresh_token.encode("utf-8")).hexdigest()
        return f"open_platform.authorizer_access_token.{self._authorizer_app_id}.{digest}"

    async def to_query(self) -> dict[str, str]:
        return {"access_token": await self.get_token()}

    async def _exchange(self) -> Credential:
        response = await self._http.request(
            "POST",
            join_url(self._base_url, "cgi-bin/component/api_authorizer_token"),
            json={
                "component_appid": self._component_app_id,
                "authorizer_appid": self._authorizer_app_id,
                "authorizer_refresh_token": self._refresh_token,
            },
        )
        payload = response.to_dict(strict=False)
        return self._credential(
            response,
            payload.get("authorizer_access_token"),
            payload.get("expires_in"),
            default_expires_in=AUTHORIZER_TOKEN_DEFAULT_EXPIRES_IN,
        )


class StaticAccessToken:
    """Token fixo entregue por uma autorização; não é renovável."""

    def __init__(self, app_id: str, access_token: str) -> None:
        self._app_id = app_id
        self._access_token = access_token

    def get_key(self) -> str:
        return f"open_platform.static_access_token.{self._app_id}"

    async def get_token(self) -> str:
        return self._access_token

    async def refresh(self) -> str:
        raise HttpError("Static access token cannot be refreshed.")

    async def to_query(self) -> dict[str, str]:
        return {"access_token": self._access_token}
