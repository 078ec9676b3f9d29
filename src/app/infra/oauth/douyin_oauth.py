"""Provedor OAuth (authorization code) do Douyin.

Fluxo:
1. redirect(state) -> URL de autorização
2. token_from_code(code) -> resposta normalizada com access_token/open_id
3. user_from_token(token, open_id) -> DouyinUser
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from app.domain.users import DouyinUser
from app.infra.tokens.base import join_url
from config.settings.douyin import OPEN_API_BASE_URL
from utils.errors import AuthorizeFailedError, ConfigError

if TYPE_CHECKING:
    from app.protocols.http_client import TransportProtocol

logger = logging.getLogger(__name__)

FORM_HEADERS = {"content-type": "application/x-www-form-urlencoded"}


class DouyinOAuth:
    """Cliente OAuth do Douyin (não é servidor OAuth)."""

    def __init__(
        self,
        client_key: str,
        client_secret: str,
        http_client: TransportProtocol,
        *,
        redirect_url: str | None = None,
        scopes: Sequence[str] = ("user_info",),
        base_url: str = OPEN_API_BASE_URL,
    ) -> None:
        if not client_key:
            raise ConfigError("No client_key configured.")
        self._client_key = client_key
        self._client_secret = client_secret
        self._http = http_client
        self._redirect_url = redirect_url
        self._scopes = list(scopes)
        self._base_url = base_url

    def with_redirect_url(self, redirect_url: str) -> DouyinOAuth:
        self._redirect_url = redirect_url
        return self

    def with_scopes(self, scopes: Sequence[str]) -> DouyinOAuth:
        self._scopes = list(scopes)
        return self

    def redirect(self, state: str | None = None) -> str:
        """URL de autorização do usuário."""
        if not self._redirect_url:
            raise ConfigError("No redirect_url configured.")
        fields: dict[str, str] = {
            "client_key": self._client_key,
            "redirect_uri": self._redirect_url,
            "scope": ",".join(self._scopes),
            "response_type": "code",
        }
        if state:
            fields["state"] = state
        return join_url(self._base_url, "platform/oauth/connect/") + "?" + urlencode(fields)

    async def token_from_code(self, code: str) -> dict[str, Any]:
        """Troca o code por token.

        Raises:
            AuthorizeFailedError: Resposta sem access_token
        """
        response = await self._http.request(
            "POST",
            join_url(self._base_url, "oauth/access_token/"),
            data={
                "client_key": self._client_key,
                "client_secret": self._client_secret,
                "code": code,
                "grant_type": "authorization_code",
            },
            headers=FORM_HEADERS,
        )
        body = response.to_dict(strict=False)
        token = body.get("data") if isinstance(body.get("data"), dict) else body
        if not token.get("access_token"):
            raise AuthorizeFailedError(
                f"Authorize Failed: {response.text}",
                body=body or response.text,
                status_code=response.status_code,
            )
        return token

    async def user_from_token(self, access_token: str, open_id: str | None = None) -> DouyinUser:
        response = await self._http.request(
            "POST",
            join_url(self._base_url, "oauth/userinfo/"),
            data={"access_token": access_token, "open_id": open_id or ""},
            headers=FORM_HEADERS,
        )
        data = response.to_dict().get("data") or {}
        user = DouyinUser.from_userinfo(data)
        user.access_token = access_token
        return user

    async def user_from_code(self, code: str) -> DouyinUser:
        token = await self.token_from_code(code)
        user = await self.user_from_token(token["access_token"], token.get("open_id"))
        user.refresh_token = token.get("refresh_token")
        user.expires_in = token.get("expires_in")
        user.token_response = token
        if not user.open_id:
            user.open_id = token.get("open_id")
        logger.info("oauth_user_resolved", extra={"has_union_id": bool(user.union_id)})
        return user
