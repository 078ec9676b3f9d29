"""Cache de credenciais em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em production. Sem persistência entre reinícios e sem
compartilhamento entre processos.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from app.protocols.cache import CredentialCacheProtocol


class MemoryCredentialCache(CredentialCacheProtocol):
    """Cache em memória com TTL por chave.

    Args:
        clock: Relógio monotônico injetável (testes)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, tuple[str, float]] = {}  # key -> (value, expires_at)
        self._clock = clock

    def _cleanup_expired(self) -> None:
        """Remove entradas expiradas."""
        now = self._clock()
        expired = [k for k, (_, expires_at) in self._store.items() if expires_at <= now]
        for k in expired:
            del self._store[k]

    async def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._store[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._cleanup_expired()
        if ttl_seconds <= 0:
            self._store.pop(key, None)
            return
        self._store[key] = (value, self._clock() + ttl_seconds)

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def __len__(self) -> int:
        self._cleanup_expired()
        return len(self._store)
