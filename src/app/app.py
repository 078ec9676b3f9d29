"""ASGI entrypoint do douyin-connect.

    uvicorn app.app:app --host 0.0.0.0 --port 8080

Logging é configurado no import, antes de qualquer outro log do processo.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import close_clients, initialize_app, reset_applications, validate_runtime_settings
from app.bootstrap.clients import create_async_redis_client
from config.logging import get_logger
from config.settings import get_base_settings, get_cache_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncIterator[None]:
    """Valida settings e abre o Redis no startup; fecha HTTP e Redis no shutdown."""
    service = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service})
    validate_runtime_settings()

    fastapi_app.state.redis_client = None
    if get_cache_settings().backend == "redis":
        try:
            fastapi_app.state.redis_client = create_async_redis_client()
        except ValueError as exc:
            logger.warning("redis_client_not_ready", extra={"error_type": type(exc).__name__})

    try:
        yield
    finally:
        logger.info("app_shutting_down", extra={"service": service})
        await close_clients()
        reset_applications()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title="douyin-connect",
        description="Tokens, assinatura e webhooks das APIs abertas Douyin",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.include_router(create_api_router())
    logger.info("app_configured", extra={"service": get_base_settings().service_name})
    return fastapi_app


app = create_app()


def main() -> None:
    """Servidor de desenvolvimento com reload."""
    import uvicorn

    port = int(os.getenv("PORT", "8080"))
    logger.info("starting_development_server", extra={"port": port})
    uvicorn.run("app.app:app", host="0.0.0.0", port=port, reload=True)


if __name__ == "__main__":
    main()
