"""Redis Credential Cache: tokens compartilhados entre instâncias.

Usa SET com EX para gravar valor e TTL numa única operação atômica.

Contrato de Keys:
    As keys dos gerenciadores de token incluem app_id e secret; nunca são
    logadas por inteiro.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.cache import CredentialCacheProtocol
from utils.errors import CacheConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Prefixo padrão para namespace das credenciais
CACHE_PREFIX = "douyin_connect:"


def _mask(key: str) -> str:
    return key[:12] + "..." if len(key) > 12 else key


class RedisCredentialCache(CredentialCacheProtocol):
    """Cache de credenciais usando Redis (redis.asyncio).

    Args:
        redis_client: Cliente Redis assíncrono
        prefix: Namespace aplicado a todas as chaves
    """

    def __init__(self, redis_client: AsyncRedis, prefix: str = CACHE_PREFIX) -> None:
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> str | None:
        try:
            value = await self._redis.get(self._key(key))
        except Exception as exc:
            raise CacheConnectionError("Falha ao ler credencial no Redis") from exc
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else str(value)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            await self.delete(key)
            return
        try:
            await self._redis.set(self._key(key), value, ex=ttl_seconds)
        except Exception as exc:
            raise CacheConnectionError("Falha ao gravar credencial no Redis") from exc
        logger.debug("credential_cached", extra={"key": _mask(key), "ttl": ttl_seconds})

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(self._key(key))
        except Exception as exc:
            raise CacheConnectionError("Falha ao remover credencial no Redis") from exc
