"""Settings do VeGame (Volcengine cloud gaming).

Requisições ao VeGame são assinadas com HMAC-SHA256 (esquema canonical request).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

VEGAME_HOST: str = "open.volcengineapi.com"
VEGAME_REGION: str = "cn-north-1"
VEGAME_SERVICE: str = "veGame"


@dataclass(frozen=True)
class VeGameSettings:
    """Configurações do par de acesso VeGame.

    Attributes:
        access_key: Access key (AK)
        secret_key: Secret key (SK)
        version: Versão da API (ex: 2022-03-01)
        host: Host da API
        region: Região usada no credential scope
        service: Serviço usado no credential scope
        sts_expire_seconds: Validade pedida para o STS token
    """

    access_key: str = ""
    secret_key: str = ""
    version: str = ""
    host: str = VEGAME_HOST
    region: str = VEGAME_REGION
    service: str = VEGAME_SERVICE
    sts_expire_seconds: int = 300

    def validate(self) -> list[str]:
        """Valida configurações mínimas do VeGame."""
        errors: list[str] = []

        if not self.access_key:
            errors.append("VEGAME_ACCESS_KEY não configurado")

        if not self.secret_key:
            errors.append("VEGAME_SECRET_KEY não configurado")

        if not self.version:
            errors.append("VEGAME_VERSION não configurado")

        if self.sts_expire_seconds <= 0:
            errors.append("VEGAME_STS_EXPIRE_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> VeGameSettings:
    """Carrega VeGameSettings a partir de variáveis de ambiente."""
    return VeGameSettings(
        access_key=os.getenv("VEGAME_ACCESS_KEY", ""),
        secret_key=os.getenv("VEGAME_SECRET_KEY", ""),
        version=os.getenv("VEGAME_VERSION", ""),
        host=os.getenv("VEGAME_HOST", VEGAME_HOST),
        region=os.getenv("VEGAME_REGION", VEGAME_REGION),
        service=os.getenv("VEGAME_SERVICE", VEGAME_SERVICE),
        sts_expire_seconds=int(os.getenv("VEGAME_STS_EXPIRE_SECONDS", "300")),
    )


@lru_cache(maxsize=1)
def get_vegame_settings() -> VeGameSettings:
    """Retorna instância cacheada de VeGameSettings."""
    return _load_from_env()
