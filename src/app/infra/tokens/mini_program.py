"""Token do mini-program (envelope no topo: `access_token`, `expires_in`)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.credential import Credential
from app.infra.tokens.base import CachedAccessToken, join_url
from config.settings.douyin import DEVELOPER_API_BASE_URL, SANDBOX_API_BASE_URL

if TYPE_CHECKING:
    from app.protocols.cache import CredentialCacheProtocol
    from app.protocols.http_client import TransportProtocol

STABLE_TOKEN_URL = DEVELOPER_API_BASE_URL + "cgi-bin/stable_token"


class MiniProgramAccessToken(CachedAccessToken):
    """Token do mini-program.

    Modo normal: GET `cgi-bin/token` com query string.
    Modo estável: POST JSON em `cgi-bin/stable_token`; `refresh()` envia
    `force_refresh=True`, a leitura via cache não força.
    """

    def __init__(
        self,
        app_id: str,
        secret: str,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        is_sandbox: bool = False,
        use_stable_token: bool = False,
        safety_margin_seconds: int = 0,
    ) -> None:
        super().__init__(cache, http_client, safety_margin_seconds=safety_margin_seconds)
        self._app_id = app_id
        self._secret = secret
        self._use_stable_token = use_stable_token
        self._base_url = SANDBOX_API_BASE_URL if is_sandbox else DEVELOPER_API_BASE_URL
        self._force_refresh = False

    def get_key(self) -> str:
        return f"mini_app.access_token.{self._app_id}.{self._secret}.{int(self._use_stable_token)}"

    async def get_token(self) -> str:
        cached = await self._cache.get(self.get_key())
        if isinstance(cached, str) and cached:
            return cached
        return await self._refresh(force=False)

    async def refresh(self) -> str:
        return await self._refresh(force=True)

    async def _refresh(self, force: bool) -> str:
        self._force_refresh = force
        try:
            return await super().refresh()
        finally:
            self._force_refresh = False

    async def _exchange(self) -> Credential:
        if self._use_stable_token:
            response = await self._http.request(
                "POST",
                STABLE_TOKEN_URL,
                json={
                    "grant_type": "client_credential",
                    "appid": self._app_id,
                    "secret": self._secret,
                    "force_refresh": self._force_refresh,
                },
            )
        else:
            response = await self._http.request(
                "GET",
                join_url(self._base_url, "cgi-bin/token"),
                params={
                    "grant_type": "client_credential",
                    "appid": self._app_id,
                    "secret": self._secret,
                },
            )
        payload = response.to_dict(strict=False)
        return self._credential(response, payload.get("access_token"), payload.get("expires_in"))
