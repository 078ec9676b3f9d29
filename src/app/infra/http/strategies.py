"""Estratégias plugáveis do cliente autenticado.

- Predicados de token expirado: (corpo da resposta) -> bool
- Juízes de falha: (resposta) -> bool
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.http_client import ResponseProtocol

TokenExpiredPredicate = Callable[[str], bool]
FailureJudge = Callable[["ResponseProtocol"], bool]

# Código de erro de token expirado dos endpoints cgi-bin
ACCESS_TOKEN_EXPIRED_CODE = "42001"
ACCESS_TOKEN_EXPIRED_PHRASE = "access_token expired"


def is_access_token_expired(body: str) -> bool:
    """Corpo contém o código 42001 e a frase "access_token expired"."""
    return (
        bool(body)
        and ACCESS_TOKEN_EXPIRED_CODE in body
        and ACCESS_TOKEN_EXPIRED_PHRASE in body
    )


def never_expired(body: str) -> bool:
    return False


def errcode_failure(response: ResponseProtocol) -> bool:
    """Falha quando `errcode` existe e é diferente de zero."""
    payload = response.to_dict(strict=False)
    return bool(payload.get("errcode") or 0)


def errcode_or_error_failure(response: ResponseProtocol) -> bool:
    """Falha com `errcode` != 0 ou qualquer `error` presente."""
    payload = response.to_dict(strict=False)
    return bool(payload.get("errcode") or 0) or payload.get("error") is not None
