"""Protocolos e contratos do núcleo de integração."""

from .access_token import AccessTokenProtocol
from .cache import CredentialCacheProtocol
from .http_client import ResponseProtocol, TransportProtocol
from .signer import RequestSignerProtocol

__all__ = [
    "AccessTokenProtocol",
    "CredentialCacheProtocol",
    "RequestSignerProtocol",
    "ResponseProtocol",
    "TransportProtocol",
]
