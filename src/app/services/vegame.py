"""Aplicação VeGame (Volcengine cloud gaming).

Toda chamada ao VeGame é assinada (HMAC-SHA256 canonical request) com o par
AK/SK da conta.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from app.infra.signing import VolcRequestSigner, canonical_query
from app.infra.tokens import STSToken

if TYPE_CHECKING:
    from app.domain.accounts import VeGameAccount
    from app.protocols.access_token import AccessTokenProtocol
    from app.protocols.cache import CredentialCacheProtocol
    from app.protocols.http_client import ResponseProtocol, TransportProtocol
    from app.protocols.signer import RequestSignerProtocol

logger = logging.getLogger(__name__)


class VeGameClient:
    """Cliente que assina cada requisição ao VeGame."""

    def __init__(self, signer: RequestSignerProtocol, http_client: TransportProtocol, version: str) -> None:
        self._signer = signer
        self._http = http_client
        self._version = version

    async def request(
        self,
        action: str,
        method: str = "GET",
        path: str = "/",
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> ResponseProtocol:
        """Envia `Action`/`Version` na query e o corpo como JSON (quando houver).

        O hash assinado é o dos bytes exatamente enviados e a query da URL é a
        mesma string canônica que entra na assinatura.
        """
        params = {"Action": action, "Version": self._version, **(query or {})}
        content = b"" if body is None else json.dumps(body, separators=(",", ":")).encode("utf-8")
        headers = self._signer.signed_headers(method, path, params, content)

        logger.debug("vegame_request", extra={"action": action, "method": method})
        return await self._http.request(
            method,
            f"https://{self._signer.host}{path}?{canonical_query(params)}",
            content=content or None,
            headers=headers,
        )

    async def get(self, action: str, query: dict[str, Any] | None = None) -> ResponseProtocol:
        return await self.request(action, "GET", "/", None, query)

    async def post(self, action: str, body: Any = None, query: dict[str, Any] | None = None) -> ResponseProtocol:
        return await self.request(action, "POST", "/", body, query)


class VeGameApplication:
    """Composition root de uma conta VeGame."""

    def __init__(
        self,
        account: VeGameAccount,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        host: str | None = None,
        region: str | None = None,
        service: str | None = None,
        sts_expire_seconds: int = 300,
        signer: VolcRequestSigner | None = None,
    ) -> None:
        self._account = account
        self._cache = cache
        self._http = http_client
        self._sts_expire_seconds = sts_expire_seconds
        self._signer_options = {
            key: value
            for key, value in {"host": host, "region": region, "service": service}.items()
            if value
        }
        self._signer = signer
        self._sts_token: AccessTokenProtocol | None = None

    @property
    def account(self) -> VeGameAccount:
        return self._account

    def get_signer(self) -> VolcRequestSigner:
        if self._signer is None:
            self._signer = VolcRequestSigner(
                self._account.require_access_key(),
                self._account.require_secret_key(),
                **self._signer_options,
            )
        return self._signer

    def get_sts_token(self) -> AccessTokenProtocol:
        if self._sts_token is None:
            self._sts_token = STSToken(
                self._account.require_access_key(),
                self._account.require_secret_key(),
                self._account.require_version(),
                self.get_signer(),
                self._cache,
                self._http,
                expire_seconds=self._sts_expire_seconds,
            )
        return self._sts_token

    def create_client(self) -> VeGameClient:
        return VeGameClient(self.get_signer(), self._http, self._account.require_version())
