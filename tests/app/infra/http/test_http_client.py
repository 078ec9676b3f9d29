"""Testes do HttpClient sobre httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from app.infra.http import HttpClient, HttpClientConfig
from utils.errors import HttpError


def _client(handler) -> HttpClient:
    return HttpClient(
        HttpClientConfig(default_headers={"user-agent": "douyin-connect"}),
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestHttpClient:
    @pytest.mark.asyncio
    async def test_json_body_and_params_are_sent(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            request.read()
            captured.append(request)
            return httpx.Response(200, json={"errcode": 0})

        response = await _client(handler).request(
            "POST", "https://open.douyin.com/x", params={"a": "1"}, json={"k": "v"}
        )

        assert response.status_code == 200
        assert response.to_dict() == {"errcode": 0}
        assert captured[0].url.params["a"] == "1"
        assert json.loads(captured[0].content) == {"k": "v"}
        assert captured[0].headers["user-agent"] == "douyin-connect"

    @pytest.mark.asyncio
    async def test_form_body(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            request.read()
            captured.append(request)
            return httpx.Response(200, json={})

        await _client(handler).request("POST", "https://open.douyin.com/x", data={"code": "c"})

        assert captured[0].content == b"code=c"

    @pytest.mark.asyncio
    async def test_to_dict_strict_rejects_non_json(self) -> None:
        response = await _client(lambda request: httpx.Response(200, text="oops")).request(
            "GET", "https://open.douyin.com/x"
        )

        assert response.to_dict(strict=False) == {}
        with pytest.raises(HttpError) as exc_info:
            response.to_dict()
        assert exc_info.value.body == "oops"

    @pytest.mark.asyncio
    async def test_to_dict_rejects_non_object(self) -> None:
        response = await _client(lambda request: httpx.Response(200, json=[1, 2])).request(
            "GET", "https://open.douyin.com/x"
        )
        with pytest.raises(HttpError):
            response.to_dict()

    @pytest.mark.asyncio
    async def test_transport_errors_become_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(HttpError, match="http_connection_error"):
            await _client(handler).request("GET", "https://open.douyin.com/x")

    @pytest.mark.asyncio
    async def test_timeout_becomes_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(HttpError, match="http_timeout"):
            await _client(handler).request("GET", "https://open.douyin.com/x")
