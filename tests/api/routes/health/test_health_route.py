"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.health import router as health
from config.settings import CacheSettings, MiniProgramSettings, OpenPlatformSettings, VeGameSettings


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


def _use_backend(monkeypatch: pytest.MonkeyPatch, backend: str) -> None:
    settings = CacheSettings(backend=backend, redis_url="redis://localhost:6379/0")
    monkeypatch.setattr(health, "get_cache_settings", lambda: settings)


@pytest.mark.asyncio
async def test_health_returns_service_name() -> None:
    response = await health.health_check()

    assert response.status == "healthy"
    assert response.service


@pytest.mark.asyncio
async def test_readiness_skips_cache_check_for_memory_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_backend(monkeypatch, "memory")

    response = await health.readiness_check(_build_request_with_state(SimpleNamespace(redis_client=None)))
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["cache"]["status"] == "skipped"


@pytest.mark.asyncio
async def test_readiness_returns_not_ready_without_redis(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_backend(monkeypatch, "redis")

    response = await health.readiness_check(_build_request_with_state(SimpleNamespace(redis_client=None)))
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["cache"] == {"backend": "redis", "status": "failed", "latency_ms": None, "error": "not_configured"}


@pytest.mark.asyncio
async def test_readiness_returns_ready_when_redis_answers(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_backend(monkeypatch, "redis")
    redis_client = MagicMock()
    redis_client.ping = AsyncMock(return_value=True)

    response = await health.readiness_check(_build_request_with_state(SimpleNamespace(redis_client=redis_client)))
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["cache"]["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_reports_redis_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_backend(monkeypatch, "redis")
    redis_client = MagicMock()
    redis_client.ping = AsyncMock(side_effect=ConnectionError("down"))

    response = await health.readiness_check(_build_request_with_state(SimpleNamespace(redis_client=redis_client)))
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["cache"]["error"] == "ConnectionError"


@pytest.mark.asyncio
async def test_readiness_lists_configured_products(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_backend(monkeypatch, "memory")
    monkeypatch.setattr(health, "get_open_platform_settings", lambda: OpenPlatformSettings(app_id="component"))
    monkeypatch.setattr(health, "get_mini_program_settings", MiniProgramSettings)
    monkeypatch.setattr(health, "get_vegame_settings", VeGameSettings)

    response = await health.readiness_check(_build_request_with_state(SimpleNamespace(redis_client=None)))
    payload = json.loads(response.body.decode("utf-8"))

    assert payload["products"] == {"open_platform": True, "mini_program": False, "vegame": False}
