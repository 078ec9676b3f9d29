"""Protocolo de fonte de tokens de acesso."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AccessTokenProtocol(Protocol):
    """Fonte de token de acesso com cache e refresh.

    - get_token(): valor do cache ou refresh() em caso de miss
    - refresh(): troca com o provedor, grava no cache, retorna o token
    - get_key(): chave determinística no cache compartilhado
    - to_query(): parâmetros de query com o token
    """

    def get_key(self) -> str: ...

    async def get_token(self) -> str: ...

    async def refresh(self) -> str: ...

    async def to_query(self) -> dict[str, str]: ...
