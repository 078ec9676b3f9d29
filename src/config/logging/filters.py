"""Filters do handler JSON.

- CorrelationIdFilter: injeta `correlation_id` e `service`
- SecretMaskingFilter: mascara `extra` com nome de segredo (secret, token, sk...)

Nenhum dos dois descarta records.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

SENSITIVE_FIELDS = frozenset(
    {
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorizer_refresh_token",
        "sk",
        "secret_key",
        "aes_key",
        "authorization",
    }
)

MASK = "***"


def _no_correlation_id() -> str:
    return ""


class CorrelationIdFilter(logging.Filter):
    """Carimba cada record com o serviço e o correlation_id do contexto.

    Um `correlation_id` explícito em `extra` tem precedência sobre o getter.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id_getter = correlation_id_getter or _no_correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._correlation_id_getter()
        record.service = self._service_name
        return True


class SecretMaskingFilter(logging.Filter):
    """Reescreve com `***` os atributos sensíveis não vazios."""

    def __init__(self, fields: frozenset[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for name in self._fields:
            if getattr(record, name, None):
                setattr(record, name, MASK)
        return True
