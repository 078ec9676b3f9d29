"""Transporte fake sobre httpx.MockTransport que grava as requisições."""

from __future__ import annotations

import json
from collections import deque
from typing import Any

import httpx

from app.infra.http import HttpClient


class RecordingTransport:
    """HttpClient real com respostas enfileiradas.

    Cada resposta pode ser dict (JSON), str (texto) ou httpx.Response.
    A última resposta é repetida quando a fila acaba.
    """

    def __init__(self, *responses: Any) -> None:
        self._responses: deque[Any] = deque(responses)
        self._last: Any = responses[-1] if responses else {}
        self.requests: list[httpx.Request] = []
        self.client = HttpClient(
            client=httpx.AsyncClient(transport=httpx.MockTransport(self._handle)),
        )

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        item = self._responses.popleft() if self._responses else self._last
        if isinstance(item, httpx.Response):
            return item
        if isinstance(item, str):
            return httpx.Response(200, text=item)
        return httpx.Response(200, json=item)

    async def request(self, method: str, url: str, **kwargs: Any):
        return await self.client.request(method, url, **kwargs)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)
