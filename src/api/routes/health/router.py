"""Endpoints de liveness e readiness."""

from __future__ import annotations

import asyncio
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import (
    get_base_settings,
    get_cache_settings,
    get_mini_program_settings,
    get_open_platform_settings,
    get_vegame_settings,
)

REDIS_PING_TIMEOUT_SECONDS = 2.0

router = APIRouter()


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class CacheCheck:
    """Estado do cache de credenciais no momento da checagem."""

    backend: str
    status: Literal["ok", "skipped", "failed"]
    latency_ms: float | None = None
    error: str | None = None


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _configured_products() -> dict[str, bool]:
    return {
        "open_platform": bool(get_open_platform_settings().app_id),
        "mini_program": bool(get_mini_program_settings().app_id),
        "vegame": bool(get_vegame_settings().access_key),
    }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: o processo responde."""
    return HealthResponse(service=get_base_settings().service_name, timestamp=_now())


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: o cache de credenciais precisa responder.

    Com backend em memória não há o que checar.
    """
    backend = get_cache_settings().backend
    if backend == "redis":
        cache = await _ping_redis(getattr(request.app.state, "redis_client", None))
    else:
        cache = CacheCheck(backend=backend, status="skipped")

    ready = cache.status != "failed"
    payload: dict[str, Any] = {
        "status": "ready" if ready else "not_ready",
        "cache": asdict(cache),
        "products": _configured_products(),
        "timestamp": _now(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _ping_redis(redis_client: Any | None) -> CacheCheck:
    if redis_client is None:
        return CacheCheck(backend="redis", status="failed", error="not_configured")

    started = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=REDIS_PING_TIMEOUT_SECONDS)
    except TimeoutError:
        return CacheCheck(backend="redis", status="failed", error="timeout")
    except Exception as exc:
        return CacheCheck(backend="redis", status="failed", error=type(exc).__name__)

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    return CacheCheck(backend="redis", status="ok", latency_ms=elapsed_ms)
