"""Settings do cache de credenciais.

Tokens de acesso são guardados em memória (dev/test) ou Redis.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

CacheBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class CacheSettings:
    """Configurações do cache de credenciais.

    Attributes:
        backend: Backend do cache (memory|redis)
        redis_url: URL de conexão Redis
        key_prefix: Namespace aplicado às chaves no Redis
    """

    backend: CacheBackend = "memory"
    redis_url: str = ""
    key_prefix: str = "douyin_connect:"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do cache.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "redis"):
            errors.append(f"CACHE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and base.is_production:
            errors.append("CACHE_BACKEND=memory proibido em production. Use Redis.")

        if self.backend == "redis" and not self.redis_url:
            errors.append("CACHE_BACKEND=redis requer REDIS_URL configurado")

        return errors


def _load_cache_from_env() -> CacheSettings:
    """Carrega CacheSettings de variáveis de ambiente."""
    backend_str = os.getenv("CACHE_BACKEND", "memory").lower()
    backend: CacheBackend = "redis" if backend_str == "redis" else "memory"
    return CacheSettings(
        backend=backend,
        redis_url=os.getenv("REDIS_URL", ""),
        key_prefix=os.getenv("CACHE_KEY_PREFIX", "douyin_connect:"),
    )


@lru_cache(maxsize=1)
def get_cache_settings() -> CacheSettings:
    """Retorna instância cacheada de CacheSettings."""
    return _load_cache_from_env()
