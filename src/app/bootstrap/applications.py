"""Factories das aplicações a partir das settings (singletons)."""

from __future__ import annotations

from functools import lru_cache

from app.bootstrap.clients import create_credential_cache, create_http_client
from app.domain.accounts import OpenPlatformAccount, VeGameAccount
from app.services import MiniProgramApplication, OpenPlatformApplication, VeGameApplication
from config.settings import (
    get_http_settings,
    get_mini_program_settings,
    get_open_platform_settings,
    get_vegame_settings,
)


@lru_cache(maxsize=1)
def get_open_platform_app() -> OpenPlatformApplication:
    settings = get_open_platform_settings()
    http = get_http_settings()
    account = OpenPlatformAccount(
        app_id=settings.app_id,
        secret=settings.secret,
        token=settings.token or None,
        aes_key=settings.aes_key or None,
        is_sandbox=settings.is_sandbox,
    )
    return OpenPlatformApplication(
        account,
        create_credential_cache(),
        create_http_client(),
        client_token_scope=settings.client_token_scope,
        oauth_redirect_url=settings.oauth_redirect_url or None,
        oauth_scopes=settings.oauth_scopes,
        safety_margin_seconds=http.token_safety_margin_seconds,
        retry_on_token_expired=http.retry_on_token_expired,
        throw=http.throw,
    )


@lru_cache(maxsize=1)
def get_mini_program_app() -> MiniProgramApplication:
    settings = get_mini_program_settings()
    http = get_http_settings()
    account = OpenPlatformAccount(
        app_id=settings.app_id,
        secret=settings.secret,
        token=settings.token or None,
        aes_key=settings.aes_key or None,
        is_sandbox=settings.is_sandbox,
    )
    return MiniProgramApplication(
        account,
        create_credential_cache(),
        create_http_client(),
        use_stable_token=settings.use_stable_token,
        safety_margin_seconds=http.token_safety_margin_seconds,
        retry_on_token_expired=http.retry_on_token_expired,
        throw=http.throw,
    )


@lru_cache(maxsize=1)
def get_vegame_app() -> VeGameApplication:
    settings = get_vegame_settings()
    account = VeGameAccount(
        access_key=settings.access_key,
        secret_key=settings.secret_key,
        version=settings.version,
    )
    return VeGameApplication(
        account,
        create_credential_cache(),
        create_http_client(),
        host=settings.host,
        region=settings.region,
        service=settings.service,
        sts_expire_seconds=settings.sts_expire_seconds,
    )


def reset_applications() -> None:
    get_open_platform_app.cache_clear()
    get_mini_program_app.cache_clear()
    get_vegame_app.cache_clear()
