"""Aplicação Open Platform (componente Douyin).

Composição: conta + cache + transporte. Os tokens, o codec e o servidor são
criados sob demanda e reaproveitados pela instância.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from api.connectors.douyin.webhook import WebhookCodec, WebhookServer
from app.domain.accounts import OpenPlatformAccount
from app.domain.authorization import Authorization
from app.infra.http import AccessTokenAwareClient, errcode_failure
from app.infra.oauth import DouyinOAuth
from app.infra.tokens import (
    AuthorizerAccessToken,
    OauthClientToken,
    OpenPlatformAccessToken,
    StaticAccessToken,
)
from app.infra.tokens.base import dig
from app.services.mini_program import MiniProgramApplication
from config.settings.douyin import OPEN_API_BASE_URL, SANDBOX_API_BASE_URL
from utils.errors import HttpError

if TYPE_CHECKING:
    from app.protocols.access_token import AccessTokenProtocol
    from app.protocols.cache import CredentialCacheProtocol
    from app.protocols.http_client import TransportProtocol

logger = logging.getLogger(__name__)

JSB_TICKET_SCOPE = "js.ticket"


class OpenPlatformApplication:
    """Composition root de uma conta Open Platform.

    Args:
        account: Identidade da conta
        cache: Cache de credenciais
        http_client: Transporte HTTP
        client_token_scope: Escopo do client token (api/apps/v2/token)
        oauth_redirect_url: Redirect do fluxo OAuth
        oauth_scopes: Escopos pedidos no fluxo OAuth
        safety_margin_seconds: Margem aplicada ao TTL dos tokens
        retry_on_token_expired: Reenvio único quando o token expira
        throw: Lança HttpError em respostas de falha
    """

    def __init__(
        self,
        account: OpenPlatformAccount,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        client_token_scope: str = "ma.clientToken",
        oauth_redirect_url: str | None = None,
        oauth_scopes: Sequence[str] = ("user_info",),
        safety_margin_seconds: int = 0,
        retry_on_token_expired: bool = True,
        throw: bool = True,
    ) -> None:
        self._account = account
        self._cache = cache
        self._http = http_client
        self._client_token_scope = client_token_scope
        self._oauth_redirect_url = oauth_redirect_url
        self._oauth_scopes = tuple(oauth_scopes)
        self._safety_margin = safety_margin_seconds
        self._retry_on_token_expired = retry_on_token_expired
        self._throw = throw

        self._codec: WebhookCodec | None = None
        self._server: WebhookServer | None = None
        self._access_token: AccessTokenProtocol | None = None
        self._oauth_client_token: AccessTokenProtocol | None = None
        self._oauth_factory: Callable[[OpenPlatformApplication], DouyinOAuth] | None = None

    @property
    def account(self) -> OpenPlatformAccount:
        return self._account

    @property
    def cache(self) -> CredentialCacheProtocol:
        return self._cache

    @property
    def api_base_url(self) -> str:
        return SANDBOX_API_BASE_URL if self._account.is_sandbox else OPEN_API_BASE_URL

    def get_codec(self) -> WebhookCodec:
        if self._codec is None:
            self._codec = WebhookCodec(self._account.require_token(), self._account.require_aes_key())
        return self._codec

    def get_server(self) -> WebhookServer:
        if self._server is None:
            self._server = WebhookServer(self.get_codec())
        return self._server

    def get_access_token(self) -> AccessTokenProtocol:
        if self._access_token is None:
            self._access_token = OpenPlatformAccessToken(
                self._account.require_app_id(),
                self._account.require_secret(),
                self._cache,
                self._http,
                scope=self._client_token_scope,
                is_sandbox=self._account.is_sandbox,
                safety_margin_seconds=self._safety_margin,
            )
        return self._access_token

    def set_access_token(self, access_token: AccessTokenProtocol) -> OpenPlatformApplication:
        self._access_token = access_token
        return self

    def get_oauth_client_token(self) -> AccessTokenProtocol:
        if self._oauth_client_token is None:
            self._oauth_client_token = OauthClientToken(
                self._account.require_app_id(),
                self._account.require_secret(),
                self._cache,
                self._http,
                is_sandbox=self._account.is_sandbox,
                safety_margin_seconds=self._safety_margin,
            )
        return self._oauth_client_token

    def create_client(self) -> AccessTokenAwareClient:
        """Cliente autenticado pelo token da conta; falha com `errcode != 0`."""
        return AccessTokenAwareClient(
            self._http,
            self.get_access_token(),
            base_url=self.api_base_url,
            failure_judge=errcode_failure,
            retry_on_token_expired=self._retry_on_token_expired,
            throw=self._throw,
        )

    async def get_jsb_ticket(self, oauth_client_token: AccessTokenProtocol | None = None) -> str:
        """Ticket JSB, autenticado pelo client token no header `access-token`."""
        client = AccessTokenAwareClient(
            self._http,
            oauth_client_token or self.get_oauth_client_token(),
            base_url=self.api_base_url,
            token_placement="header",
            throw=False,
        )
        response = await client.get(
            "js/getticket",
            params={"Scope": JSB_TICKET_SCOPE},
            headers={"content-type": "application/json"},
        )
        payload = response.to_dict(strict=False)
        ticket = dig(payload, "data", "ticket")
        if not ticket:
            raise HttpError(f"Failed to get ticket: {response.text}", body=payload or response.text)
        return str(ticket)

    async def refresh_authorizer_token(
        self,
        authorizer_app_id: str,
        authorizer_refresh_token: str,
    ) -> dict[str, Any]:
        """Troca o refresh token do authorizer (sem cache)."""
        response = await self.create_client().post_json(
            "cgi-bin/component/api_authorizer_token",
            {
                "component_appid": self._account.require_app_id(),
                "authorizer_appid": authorizer_app_id,
                "authorizer_refresh_token": authorizer_refresh_token,
            },
        )
        payload = response.to_dict(strict=False)
        if not payload.get("authorizer_access_token"):
            raise HttpError(
                f"Failed to get authorizer_access_token: {response.text}",
                body=payload or response.text,
            )
        return payload

    def get_authorizer_token_source(self, authorizer_app_id: str, refresh_token: str) -> AuthorizerAccessToken:
        return AuthorizerAccessToken(
            self._account.require_app_id(),
            authorizer_app_id,
            refresh_token,
            self._cache,
            self.create_client(),
            base_url=self.api_base_url,
        )

    async def get_authorizer_access_token(self, authorizer_app_id: str, refresh_token: str) -> str:
        """Token do authorizer via cache; renova com margem de 500s."""
        return await self.get_authorizer_token_source(authorizer_app_id, refresh_token).get_token()

    def get_mini_program(
        self,
        access_token: AccessTokenProtocol,
        app_id: str,
    ) -> MiniProgramApplication:
        """Mini-program autorizado, autenticado pelo token do authorizer.

        Reusa o token/aes_key da conta e o codec do componente.
        """
        account = OpenPlatformAccount(
            app_id=app_id,
            secret=None,
            token=self._account.token,
            aes_key=self._account.aes_key,
            is_sandbox=self._account.is_sandbox,
        )
        app = MiniProgramApplication(
            account,
            self._cache,
            self._http,
            retry_on_token_expired=self._retry_on_token_expired,
            throw=self._throw,
        )
        app.set_access_token(access_token)
        if self._account.aes_key:
            app.set_codec(self.get_codec())
        return app

    def get_mini_program_with_refresh_token(self, app_id: str, refresh_token: str) -> MiniProgramApplication:
        return self.get_mini_program(self.get_authorizer_token_source(app_id, refresh_token), app_id)

    def get_mini_program_with_access_token(self, app_id: str, access_token: str) -> MiniProgramApplication:
        return self.get_mini_program(StaticAccessToken(app_id, access_token), app_id)

    def get_mini_program_with_authorization(self, authorization: Authorization) -> MiniProgramApplication:
        return self.get_mini_program_with_access_token(authorization.app_id, authorization.access_token)

    def set_oauth_factory(self, factory: Callable[[OpenPlatformApplication], DouyinOAuth]) -> OpenPlatformApplication:
        self._oauth_factory = factory
        return self

    def get_oauth(self) -> DouyinOAuth:
        if self._oauth_factory is not None:
            provider = self._oauth_factory(self)
            if not isinstance(provider, DouyinOAuth):
                raise TypeError("The factory must return a DouyinOAuth instance.")
            return provider
        return DouyinOAuth(
            self._account.require_app_id(),
            self._account.require_secret(),
            self._http,
            redirect_url=self._oauth_redirect_url,
            scopes=self._oauth_scopes,
            base_url=self.api_base_url,
        )
