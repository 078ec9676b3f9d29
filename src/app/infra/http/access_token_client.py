"""Cliente HTTP que injeta o token de acesso em cada requisição.

Política de retry: se o corpo da resposta indicar token expirado, força um
refresh (ignorando o cache) e reenvia a mesma requisição exatamente uma vez.
Uma segunda falha é entregue ao chamador.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from app.infra.http.strategies import (
    FailureJudge,
    TokenExpiredPredicate,
    is_access_token_expired,
)
from utils.errors import HttpError

if TYPE_CHECKING:
    from app.protocols.access_token import AccessTokenProtocol
    from app.protocols.http_client import ResponseProtocol, TransportProtocol

logger = logging.getLogger(__name__)

TokenPlacement = Literal["query", "header"]


class AccessTokenAwareClient:
    """Cliente autenticado por token (bearer em query ou header).

    Args:
        client: Transporte HTTP
        access_token: Fonte de token; None envia sem autenticação
        base_url: Prefixo para URLs relativas
        token_placement: "query" (access_token=...) ou "header" (access-token: ...)
        failure_judge: Decide se a resposta é falha de negócio
        is_token_expired: Decide se o corpo indica token expirado
        retry_on_token_expired: Habilita o reenvio único
        throw: Lança HttpError quando failure_judge acusa falha
    """

    def __init__(
        self,
        client: TransportProtocol,
        access_token: AccessTokenProtocol | None = None,
        *,
        base_url: str = "",
        token_placement: TokenPlacement = "query",
        failure_judge: FailureJudge | None = None,
        is_token_expired: TokenExpiredPredicate = is_access_token_expired,
        retry_on_token_expired: bool = True,
        throw: bool = True,
    ) -> None:
        self._client = client
        self._access_token = access_token
        self._base_url = base_url
        self._token_placement = token_placement
        self._failure_judge = failure_judge
        self._is_token_expired = is_token_expired
        self._retry_on_token_expired = retry_on_token_expired
        self._throw = throw

    def with_access_token(self, access_token: AccessTokenProtocol) -> AccessTokenAwareClient:
        """Retorna cópia do cliente usando outra fonte de token."""
        return AccessTokenAwareClient(
            self._client,
            access_token,
            base_url=self._base_url,
            token_placement=self._token_placement,
            failure_judge=self._failure_judge,
            is_token_expired=self._is_token_expired,
            retry_on_token_expired=self._retry_on_token_expired,
            throw=self._throw,
        )

    def _url(self, url: str) -> str:
        if url.startswith(("http://", "https://")) or not self._base_url:
            return url
        return self._base_url.rstrip("/") + "/" + url.lstrip("/")

    async def _send(
        self,
        method: str,
        url: str,
        token: str | None,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        body: dict[str, Any],
    ) -> ResponseProtocol:
        params = dict(params or {})
        headers = dict(headers or {})
        if token is not None:
            if self._token_placement == "header":
                headers["access-token"] = token
            else:
                params["access_token"] = token
        return await self._client.request(
            method,
            self._url(url),
            params=params or None,
            headers=headers or None,
            **body,
        )

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
    ) -> ResponseProtocol:
        """Envia a requisição autenticada.

        Raises:
            HttpError: Falha de negócio (com throw=True) ou de transporte
        """
        body = {"json": json, "data": data, "content": content}
        token = await self._access_token.get_token() if self._access_token else None
        response = await self._send(method, url, token, params, headers, body)

        if (
            self._access_token is not None
            and self._retry_on_token_expired
            and self._is_token_expired(response.text)
        ):
            logger.info("access_token_expired_retry", extra={"method": method, "url": url})
            try:
                token = await self._access_token.refresh()
            except HttpError as exc:
                # erro do refresh não pode esconder a resposta original
                raise HttpError(
                    f"Request failed: {response.text}",
                    body=response.to_dict(strict=False) or response.text,
                    status_code=response.status_code,
                ) from exc
            response = await self._send(method, url, token, params, headers, body)

        if self._throw and self._failure_judge is not None and self._failure_judge(response):
            raise HttpError(
                f"Request failed: {response.text}",
                body=response.to_dict(strict=False) or response.text,
                status_code=response.status_code,
            )
        return response

    async def get(self, url: str, **kwargs: Any) -> ResponseProtocol:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> ResponseProtocol:
        return await self.request("POST", url, **kwargs)

    async def post_json(self, url: str, payload: Any, **kwargs: Any) -> ResponseProtocol:
        return await self.request("POST", url, json=payload, **kwargs)
