"""Base dos gerenciadores de token com cache.

Estado por chave: vazio -> em cache -> (TTL expira) vazio.
Dois refreshes concorrentes gravam tokens válidos; vence a última escrita.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from app.domain.credential import Credential
from utils.errors import HttpError

if TYPE_CHECKING:
    from app.protocols.cache import CredentialCacheProtocol
    from app.protocols.http_client import ResponseProtocol, TransportProtocol

logger = logging.getLogger(__name__)


def join_url(base_url: str, path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def dig(payload: Any, *path: str) -> Any:
    """Acessa campo aninhado; None se algum nível faltar."""
    current = payload
    for name in path:
        if not isinstance(current, dict):
            return None
        current = current.get(name)
    return current


class CachedAccessToken(ABC):
    """Token de acesso lido do cache e renovado no provedor em caso de miss.

    Subclasses implementam `get_key()` e `_exchange()`; a base cuida de cache,
    safety margin e erros.

    Args:
        cache: Cache de credenciais compartilhado
        http_client: Transporte HTTP
        safety_margin_seconds: Reduz o TTL para renovar antes da expiração
    """

    token_field: str = "access_token"

    def __init__(
        self,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        safety_margin_seconds: int = 0,
    ) -> None:
        self._cache = cache
        self._http = http_client
        self._safety_margin = safety_margin_seconds

    @abstractmethod
    def get_key(self) -> str:
        """Chave determinística da identidade no cache."""

    @abstractmethod
    async def _exchange(self) -> Credential:
        """Troca com o provedor. Deve levantar HttpError sem token."""

    async def get_token(self) -> str:
        cached = await self._cache.get(self.get_key())
        if isinstance(cached, str) and cached:
            return cached
        return await self.refresh()

    async def refresh(self) -> str:
        credential = await self._exchange()
        ttl = credential.cache_ttl_seconds()
        await self._cache.set(self.get_key(), credential.value, ttl)
        logger.info(
            "access_token_refreshed",
            extra={"token_type": type(self).__name__, "ttl_seconds": ttl},
        )
        return credential.value

    async def to_query(self) -> dict[str, str]:
        return {self.token_field: await self.get_token()}

    def _credential(self, response: ResponseProtocol, token: Any, expires_in: Any, default_expires_in: int = 7200) -> Credential:
        if not token or not isinstance(token, str):
            raise HttpError(
                f"Failed to get {self.token_field}: {response.text}",
                body=response.to_dict(strict=False) or response.text,
                status_code=response.status_code,
            )
        try:
            seconds = int(expires_in) if expires_in is not None else default_expires_in
        except (TypeError, ValueError):
            seconds = default_expires_in
        return Credential.from_expires_in(token, seconds, self._safety_margin)
