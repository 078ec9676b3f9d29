"""Identidades emissoras de credenciais.

Cada identidade pertence exclusivamente ao gerenciador construído com ela.
Imutáveis: nunca mutadas depois de criadas.
"""

from __future__ import annotations

from dataclasses import dataclass

from utils.errors import ConfigError


@dataclass(frozen=True, slots=True)
class OpenPlatformAccount:
    """Aplicação/componente Douyin (Open Platform ou Mini Program).

    Attributes:
        app_id: app_id / client_key
        secret: Secret da aplicação
        token: Token de assinatura dos webhooks
        aes_key: Chave AES-128 dos webhooks
        is_sandbox: Conta de sandbox
    """

    app_id: str
    secret: str | None
    token: str | None = None
    aes_key: str | None = None
    is_sandbox: bool = False

    def require_app_id(self) -> str:
        if not self.app_id:
            raise ConfigError("No app_id configured.")
        return self.app_id

    def require_secret(self) -> str:
        if not self.secret:
            raise ConfigError("No secret configured.")
        return self.secret

    def require_token(self) -> str:
        if not self.token:
            raise ConfigError("No token configured.")
        return self.token

    def require_aes_key(self) -> str:
        if not self.aes_key:
            raise ConfigError("No aes_key configured.")
        return self.aes_key


@dataclass(frozen=True, slots=True)
class VeGameAccount:
    """Par de acesso VeGame (AK/SK) e versão da API."""

    access_key: str
    secret_key: str | None
    version: str | None

    def require_access_key(self) -> str:
        if not self.access_key:
            raise ConfigError("No AK configured.")
        return self.access_key

    def require_secret_key(self) -> str:
        if not self.secret_key:
            raise ConfigError("No SK configured.")
        return self.secret_key

    def require_version(self) -> str:
        if not self.version:
            raise ConfigError("No Version configured.")
        return self.version
