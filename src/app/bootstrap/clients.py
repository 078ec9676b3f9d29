"""Factories de clientes externos: Redis, cache de credenciais e HTTP."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

import httpx

from app.infra.http import HttpClient, HttpClientConfig
from app.infra.stores import MemoryCredentialCache, RedisCredentialCache
from config.settings import get_cache_settings, get_http_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from app.protocols.cache import CredentialCacheProtocol

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis:
    """Cria cliente Redis assíncrono (singleton).

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_cache_settings().redis_url
    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )
    logger.info("async_redis_client_created")
    return client


@lru_cache(maxsize=1)
def create_credential_cache() -> CredentialCacheProtocol:
    """Cache de credenciais conforme CACHE_BACKEND (singleton)."""
    settings = get_cache_settings()
    if settings.backend == "redis":
        logger.info("credential_cache_created", extra={"backend": "redis"})
        return RedisCredentialCache(create_async_redis_client(), prefix=settings.key_prefix)

    logger.info("credential_cache_created", extra={"backend": "memory"})
    return MemoryCredentialCache()


@lru_cache(maxsize=1)
def create_http_client() -> HttpClient:
    """Transporte HTTP compartilhado (um httpx.AsyncClient por processo)."""
    settings = get_http_settings()
    client = httpx.AsyncClient(
        timeout=settings.timeout_seconds,
        verify=settings.verify_ssl,
    )
    return HttpClient(
        HttpClientConfig(timeout_seconds=settings.timeout_seconds, verify_ssl=settings.verify_ssl),
        client=client,
    )


async def close_clients() -> None:
    """Fecha clientes compartilhados já criados."""
    if create_http_client.cache_info().currsize:
        await create_http_client().aclose()
        create_http_client.cache_clear()
    if create_async_redis_client.cache_info().currsize:
        await create_async_redis_client().aclose()
        create_async_redis_client.cache_clear()
    create_credential_cache.cache_clear()
