"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthorizeFailedError,
    BadRequestError,
    CacheConnectionError,
    ConfigError,
    CryptoError,
    DouyinError,
    HttpError,
    InfrastructureError,
)

__all__ = [
    "AuthorizeFailedError",
    "BadRequestError",
    "CacheConnectionError",
    "ConfigError",
    "CryptoError",
    "DouyinError",
    "HttpError",
    "InfrastructureError",
]
