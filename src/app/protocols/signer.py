"""Protocolo de assinatura de requisições."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol


class RequestSignerProtocol(Protocol):
    """Produz os headers assinados para uma requisição ao host do signer."""

    @property
    def host(self) -> str: ...

    def signed_headers(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: bytes = b"",
        now: datetime | None = None,
    ) -> dict[str, str]: ...
