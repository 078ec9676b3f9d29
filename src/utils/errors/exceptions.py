"""Hierarquia de exceções compartilhada pelo núcleo de integração Douyin.

Taxonomia:
- ConfigError: campo obrigatório de identidade ausente (fatal, nunca retentado)
- HttpError: resposta do provedor sem os campos esperados (body bruto anexado)
- CryptoError: falha da primitiva de cifra (chave/IV inválidos, ciphertext corrompido)
- BadRequestError: assinatura de webhook ausente ou inválida (apenas inbound)
- InfrastructureError: falhas transitórias de cache/infra
"""

from __future__ import annotations

from typing import Any


class DouyinError(Exception):
    """Base para todos os erros do núcleo."""


class ConfigError(DouyinError):
    """Campo obrigatório de configuração/identidade ausente."""


class HttpError(DouyinError):
    """Resposta do provedor inválida ou sem os campos esperados.

    Args:
        message: Mensagem de diagnóstico
        body: Corpo bruto da resposta (dict decodificado ou texto)
        status_code: Status HTTP, quando disponível
    """

    def __init__(
        self,
        message: str,
        body: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.body = body
        self.status_code = status_code


class AuthorizeFailedError(HttpError):
    """Troca de código OAuth não retornou access_token."""


class CryptoError(DouyinError):
    """Falha em operação de cifra simétrica."""


class BadRequestError(DouyinError):
    """Requisição inbound rejeitada antes de qualquer descriptografia."""


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class CacheConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar o cache de credenciais."""
