"""Settings específicas da Douyin Open Platform e de Mini Programs.

Cada produto tem sua própria dataclass para isolamento de mudanças.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

# Hosts públicos da plataforma
OPEN_API_BASE_URL: str = "https://open.douyin.com/"
DEVELOPER_API_BASE_URL: str = "https://developer.toutiao.com/"
SANDBOX_API_BASE_URL: str = "https://open-sandbox.douyin.com/"


@dataclass(frozen=True)
class OpenPlatformSettings:
    """Configurações da conta Open Platform (component).

    Attributes:
        app_id: app_id / client_key da aplicação
        secret: Secret da aplicação
        token: Token usado na assinatura dos webhooks
        aes_key: Chave AES-128 (16 bytes) dos payloads de webhook
        is_sandbox: Usa os hosts de sandbox
        client_token_scope: Scope pedido no token de aplicação
        oauth_redirect_url: Redirect URI do fluxo OAuth
        oauth_scopes: Scopes do fluxo OAuth
    """

    app_id: str = ""
    secret: str = ""
    token: str = ""
    aes_key: str = ""
    is_sandbox: bool = False
    client_token_scope: str = "ma.clientToken"
    oauth_redirect_url: str = ""
    oauth_scopes: tuple[str, ...] = field(default=("user_info",))

    @property
    def api_base_url(self) -> str:
        """Host usado pelo cliente autenticado."""
        return SANDBOX_API_BASE_URL if self.is_sandbox else OPEN_API_BASE_URL

    def validate(self) -> list[str]:
        """Valida configurações mínimas da Open Platform.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.app_id:
            errors.append("DOUYIN_OPEN_APP_ID não configurado")

        if not self.secret:
            errors.append("DOUYIN_OPEN_SECRET não configurado")

        if not self.aes_key:
            errors.append("DOUYIN_OPEN_AES_KEY não configurado")
        elif len(self.aes_key.encode("utf-8")) != 16:
            errors.append("DOUYIN_OPEN_AES_KEY deve ter 16 bytes")

        return errors


@dataclass(frozen=True)
class MiniProgramSettings:
    """Configurações de um Mini Program.

    Attributes:
        app_id: app_id do mini program
        secret: Secret do mini program
        token: Token de assinatura dos webhooks (opcional em modo plain)
        aes_key: Chave AES dos webhooks (opcional em modo plain)
        is_sandbox: Usa os hosts de sandbox
        use_stable_token: Usa o endpoint de stable_token
    """

    app_id: str = ""
    secret: str = ""
    token: str = ""
    aes_key: str = ""
    is_sandbox: bool = False
    use_stable_token: bool = False

    @property
    def api_base_url(self) -> str:
        """Host usado pelo cliente autenticado."""
        return SANDBOX_API_BASE_URL if self.is_sandbox else DEVELOPER_API_BASE_URL

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Mini Program."""
        errors: list[str] = []

        if not self.app_id:
            errors.append("DOUYIN_MINI_APP_ID não configurado")

        if not self.secret:
            errors.append("DOUYIN_MINI_SECRET não configurado")

        if self.aes_key and len(self.aes_key.encode("utf-8")) != 16:
            errors.append("DOUYIN_MINI_AES_KEY deve ter 16 bytes")

        return errors


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("true", "1", "yes")


def _load_open_platform_from_env() -> OpenPlatformSettings:
    """Carrega OpenPlatformSettings a partir de variáveis de ambiente."""
    scopes = os.getenv("DOUYIN_OPEN_OAUTH_SCOPES", "user_info")
    return OpenPlatformSettings(
        app_id=os.getenv("DOUYIN_OPEN_APP_ID", ""),
        secret=os.getenv("DOUYIN_OPEN_SECRET", ""),
        token=os.getenv("DOUYIN_OPEN_TOKEN", ""),
        aes_key=os.getenv("DOUYIN_OPEN_AES_KEY", ""),
        is_sandbox=_env_flag("DOUYIN_OPEN_IS_SANDBOX"),
        client_token_scope=os.getenv("DOUYIN_OPEN_CLIENT_TOKEN_SCOPE", "ma.clientToken"),
        oauth_redirect_url=os.getenv("DOUYIN_OPEN_OAUTH_REDIRECT_URL", ""),
        oauth_scopes=tuple(s.strip() for s in scopes.split(",") if s.strip()),
    )


def _load_mini_program_from_env() -> MiniProgramSettings:
    """Carrega MiniProgramSettings a partir de variáveis de ambiente."""
    return MiniProgramSettings(
        app_id=os.getenv("DOUYIN_MINI_APP_ID", ""),
        secret=os.getenv("DOUYIN_MINI_SECRET", ""),
        token=os.getenv("DOUYIN_MINI_TOKEN", ""),
        aes_key=os.getenv("DOUYIN_MINI_AES_KEY", ""),
        is_sandbox=_env_flag("DOUYIN_MINI_IS_SANDBOX"),
        use_stable_token=_env_flag("DOUYIN_MINI_USE_STABLE_TOKEN"),
    )


@lru_cache(maxsize=1)
def get_open_platform_settings() -> OpenPlatformSettings:
    """Retorna instância cacheada de OpenPlatformSettings."""
    return _load_open_platform_from_env()


@lru_cache(maxsize=1)
def get_mini_program_settings() -> MiniProgramSettings:
    """Retorna instância cacheada de MiniProgramSettings."""
    return _load_mini_program_from_env()
