"""Settings do transporte HTTP compartilhado."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class HttpSettings:
    """Configurações HTTP usadas por todos os clientes.

    Attributes:
        timeout_seconds: Timeout por requisição (limita toda chamada de rede)
        retry_on_token_expired: Reenvia uma única vez se o token expirou
        throw: Lança HttpError quando a resposta indica falha de negócio
        token_safety_margin_seconds: Margem subtraída do expires_in no cache
        verify_ssl: Verificação de certificado TLS
    """

    timeout_seconds: float = 10.0
    retry_on_token_expired: bool = True
    throw: bool = True
    token_safety_margin_seconds: int = 0
    verify_ssl: bool = True

    def validate(self) -> list[str]:
        """Valida configurações HTTP.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.timeout_seconds <= 0:
            errors.append("HTTP_TIMEOUT_SECONDS deve ser > 0")

        if self.token_safety_margin_seconds < 0:
            errors.append("TOKEN_SAFETY_MARGIN_SECONDS deve ser >= 0")

        return errors


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _load_from_env() -> HttpSettings:
    """Carrega HttpSettings a partir de variáveis de ambiente."""
    return HttpSettings(
        timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "10")),
        retry_on_token_expired=_env_flag("HTTP_RETRY_ON_TOKEN_EXPIRED", "true"),
        throw=_env_flag("HTTP_THROW", "true"),
        token_safety_margin_seconds=int(os.getenv("TOKEN_SAFETY_MARGIN_SECONDS", "0")),
        verify_ssl=_env_flag("HTTP_VERIFY_SSL", "true"),
    )


@lru_cache(maxsize=1)
def get_http_settings() -> HttpSettings:
    """Retorna instância cacheada de HttpSettings."""
    return _load_from_env()
