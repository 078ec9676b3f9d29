"""Stores: implementações concretas do cache de credenciais.

Módulos disponíveis:
    - memory_cache: cache em memória para desenvolvimento/testes
    - redis_cache: cache compartilhado em Redis
"""

from __future__ import annotations

from app.infra.stores.memory_cache import MemoryCredentialCache
from app.infra.stores.redis_cache import RedisCredentialCache

__all__ = [
    "MemoryCredentialCache",
    "RedisCredentialCache",
]
