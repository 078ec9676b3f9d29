"""Bootstrap da aplicação: inicialização e wiring.

Composition root: configura logging, valida settings e conecta
implementações concretas (cache, transporte) às aplicações.

Uso:
    from app.bootstrap import initialize_app, get_open_platform_app

    initialize_app()
    app = get_open_platform_app()
"""

from __future__ import annotations

import logging

from app.bootstrap.applications import (
    get_mini_program_app,
    get_open_platform_app,
    get_vegame_app,
    reset_applications,
)
from app.bootstrap.clients import close_clients, create_credential_cache, create_http_client
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_cache_settings,
    get_http_settings,
    get_mini_program_settings,
    get_open_platform_settings,
    get_vegame_settings,
)

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)

__all__ = [
    "close_clients",
    "create_credential_cache",
    "create_http_client",
    "get_mini_program_app",
    "get_open_platform_app",
    "get_vegame_app",
    "initialize_app",
    "reset_applications",
    "validate_runtime_settings",
]


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level.upper(),
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings no startup.

    Em `staging`/`production` falha rápido. Produtos sem identidade
    configurada (app_id/access_key vazios) não são validados.
    """
    base = get_base_settings()
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"cache: {error}" for error in get_cache_settings().validate(base))
    errors.extend(f"http: {error}" for error in get_http_settings().validate())

    open_platform = get_open_platform_settings()
    if open_platform.app_id:
        errors.extend(f"open_platform: {error}" for error in open_platform.validate())

    mini_program = get_mini_program_settings()
    if mini_program.app_id:
        errors.extend(f"mini_program: {error}" for error in mini_program.validate())

    vegame = get_vegame_settings()
    if vegame.access_key:
        errors.extend(f"vegame: {error}" for error in vegame.validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")
