"""Protocolo do cache de credenciais.

Interface leve (ABC) dependida pelos gerenciadores de token.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CredentialCacheProtocol(ABC):
    """Contrato mínimo para cache chave/valor com TTL por chave.

    Operações atômicas por chave; não há transações entre chaves.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Retorna o valor armazenado ou None se ausente/expirado."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Armazena valor com TTL em segundos.

        TTL <= 0 não armazena nada.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Invalida explicitamente a chave."""
