"""Aplicação Mini Program."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.connectors.douyin.webhook import WebhookCodec, WebhookServer
from app.infra.http import AccessTokenAwareClient, errcode_or_error_failure
from app.infra.tokens import MiniProgramAccessToken
from config.settings.douyin import DEVELOPER_API_BASE_URL, SANDBOX_API_BASE_URL
from utils.errors import ConfigError

if TYPE_CHECKING:
    from app.domain.accounts import OpenPlatformAccount
    from app.protocols.access_token import AccessTokenProtocol
    from app.protocols.cache import CredentialCacheProtocol
    from app.protocols.http_client import TransportProtocol


class MiniProgramApplication:
    """Composition root de um mini-program.

    O servidor de webhook roda em modo texto puro quando a conta não tem aes_key.
    """

    def __init__(
        self,
        account: OpenPlatformAccount,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        use_stable_token: bool = False,
        safety_margin_seconds: int = 0,
        retry_on_token_expired: bool = True,
        throw: bool = True,
    ) -> None:
        self._account = account
        self._cache = cache
        self._http = http_client
        self._use_stable_token = use_stable_token
        self._safety_margin = safety_margin_seconds
        self._retry_on_token_expired = retry_on_token_expired
        self._throw = throw

        self._codec: WebhookCodec | None = None
        self._server: WebhookServer | None = None
        self._access_token: AccessTokenProtocol | None = None

    @property
    def account(self) -> OpenPlatformAccount:
        return self._account

    @property
    def api_base_url(self) -> str:
        return SANDBOX_API_BASE_URL if self._account.is_sandbox else DEVELOPER_API_BASE_URL

    def get_codec(self) -> WebhookCodec:
        if self._codec is None:
            if not self._account.token or not self._account.aes_key:
                raise ConfigError("token or aes_key cannot be empty.")
            self._codec = WebhookCodec(self._account.token, self._account.aes_key)
        return self._codec

    def set_codec(self, codec: WebhookCodec) -> MiniProgramApplication:
        self._codec = codec
        return self

    def get_server(self) -> WebhookServer:
        if self._server is None:
            codec = self.get_codec() if (self._codec or self._account.aes_key) else None
            self._server = WebhookServer(codec)
        return self._server

    def get_access_token(self) -> AccessTokenProtocol:
        if self._access_token is None:
            self._access_token = MiniProgramAccessToken(
                self._account.require_app_id(),
                self._account.require_secret(),
                self._cache,
                self._http,
                is_sandbox=self._account.is_sandbox,
                use_stable_token=self._use_stable_token,
                safety_margin_seconds=self._safety_margin,
            )
        return self._access_token

    def set_access_token(self, access_token: AccessTokenProtocol) -> MiniProgramApplication:
        self._access_token = access_token
        return self

    def create_client(self) -> AccessTokenAwareClient:
        """Cliente autenticado; falha com `errcode != 0` ou `error` presente.

        Token expirado (42001) força um refresh e reenvia uma única vez.
        """
        return AccessTokenAwareClient(
            self._http,
            self.get_access_token(),
            base_url=self.api_base_url,
            failure_judge=errcode_or_error_failure,
            retry_on_token_expired=self._retry_on_token_expired,
            throw=self._throw,
        )
