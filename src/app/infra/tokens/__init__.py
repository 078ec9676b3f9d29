"""Gerenciadores de token de acesso (cache + refresh por provedor)."""

from app.infra.tokens.authorizer import AuthorizerAccessToken, StaticAccessToken
from app.infra.tokens.base import CachedAccessToken
from app.infra.tokens.mini_program import MiniProgramAccessToken
from app.infra.tokens.open_platform import OauthClientToken, OpenPlatformAccessToken
from app.infra.tokens.sts_token import STSToken

__all__ = [
    "AuthorizerAccessToken",
    "CachedAccessToken",
    "MiniProgramAccessToken",
    "OauthClientToken",
    "OpenPlatformAccessToken",
    "STSToken",
    "StaticAccessToken",
]
