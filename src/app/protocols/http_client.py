"""Protocolos HTTP usados pelo núcleo.

Evita dependência direta de httpx nos gerenciadores de token.
"""

from __future__ import annotations

from typing import Any, Protocol


class ResponseProtocol(Protocol):
    """Resposta mínima consumida pelo núcleo."""

    @property
    def status_code(self) -> int: ...

    @property
    def text(self) -> str: ...

    def to_dict(self, strict: bool = True) -> dict[str, Any]: ...


class TransportProtocol(Protocol):
    """Transporte genérico: request(method, url, {query, json, form, headers})."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> ResponseProtocol: ...
