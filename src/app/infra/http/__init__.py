"""HTTP: transporte (httpx) e cliente autenticado por token."""

from app.infra.http.access_token_client import AccessTokenAwareClient
from app.infra.http.client import HttpClient, HttpClientConfig, HttpResponse
from app.infra.http.strategies import (
    errcode_failure,
    errcode_or_error_failure,
    is_access_token_expired,
    never_expired,
)

__all__ = [
    "AccessTokenAwareClient",
    "HttpClient",
    "HttpClientConfig",
    "HttpResponse",
    "errcode_failure",
    "errcode_or_error_failure",
    "is_access_token_expired",
    "never_expired",
]
