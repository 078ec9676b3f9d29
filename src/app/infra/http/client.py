"""Cliente HTTP base (httpx) usado por tokens e clientes autenticados.

Sem retries de transporte: o único reenvio do núcleo é o de token expirado,
feito pelo AccessTokenAwareClient. Toda chamada é limitada pelo timeout.
"""

from __future__ import annotations

import json as jsonlib
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from utils.errors import HttpError

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str = ""
    timeout_seconds: float = 10.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpResponse:
    """Resposta do transporte com decodificação JSON sob demanda."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def text(self) -> str:
        return self._response.text

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    def to_dict(self, strict: bool = True) -> dict[str, Any]:
        """Decodifica o corpo JSON.

        Args:
            strict: Se True, corpo não-JSON (ou não-objeto) levanta HttpError;
                se False, retorna dict vazio.
        """
        try:
            payload = jsonlib.loads(self._response.content or b"null")
        except (ValueError, UnicodeDecodeError) as exc:
            if not strict:
                return {}
            raise HttpError(
                "Response JSON inválido",
                body=self.text,
                status_code=self.status_code,
            ) from exc

        if not isinstance(payload, dict):
            if not strict:
                return {}
            raise HttpError(
                "Response JSON não é um objeto",
                body=self.text,
                status_code=self.status_code,
            )
        return payload


class HttpClient:
    """Cliente HTTP simples para chamadas externas.

    Args:
        config: Configuração (timeout, headers padrão, base_url)
        client: httpx.AsyncClient compartilhado (opcional). Sem ele, cada
            requisição abre e fecha o próprio cliente.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._client = client

    @property
    def config(self) -> HttpClientConfig:
        return self._config

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
    ) -> HttpResponse:
        merged_headers = {**self._config.default_headers, **(headers or {})}
        kwargs: dict[str, Any] = {"params": params, "headers": merged_headers}
        if content is not None:
            kwargs["content"] = content
        elif json is not None:
            kwargs["json"] = json
        elif data is not None:
            kwargs["data"] = data

        try:
            if self._client is not None:
                response = await self._client.request(method, url, **kwargs)
            else:
                async with httpx.AsyncClient(
                    base_url=self._config.base_url,
                    timeout=self._config.timeout_seconds,
                    verify=self._config.verify_ssl,
                ) as client:
                    response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise HttpError(f"http_timeout: {method} {url}") from exc
        except httpx.TransportError as exc:
            raise HttpError(f"http_connection_error: {method} {url}") from exc

        logger.debug(
            "http_request_completed",
            extra={"method": method, "path": response.request.url.path, "status_code": response.status_code},
        )
        return HttpResponse(response)

    async def aclose(self) -> None:
        """Fecha o httpx.AsyncClient compartilhado, se houver."""
        if self._client is not None:
            await self._client.aclose()
