"""Modelos de domínio do núcleo de integração."""

from app.domain.accounts import OpenPlatformAccount, VeGameAccount
from app.domain.authorization import Authorization
from app.domain.credential import Credential
from app.domain.messages import WebhookMessage
from app.domain.users import DouyinUser

__all__ = [
    "Authorization",
    "Credential",
    "DouyinUser",
    "OpenPlatformAccount",
    "VeGameAccount",
    "WebhookMessage",
]
