"""Assinador de requisições para o servidor de recursos VeGame (Volcengine).

Passos (ordem fixa):
1. query canônica
2. bloco de headers `host;x-date;x-content-sha256;content-type`
3. hash SHA-256 do corpo (vazio quando não há corpo)
4. requisição canônica e seu SHA-256
5. escopo `YYYYMMDD/region/service/request` e string-to-sign
6. cadeia de chaves HMAC (bytes crus) e assinatura em hex minúsculo
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from app.infra.signing.canonical import (
    SCOPE_TERMINATOR,
    SIGNED_HEADERS,
    SIGNING_ALGORITHM,
    SigningContext,
    canonical_headers,
    canonical_query,
    sha256_hex,
)
from config.settings.vegame import VEGAME_HOST, VEGAME_REGION, VEGAME_SERVICE
from utils.errors import ConfigError

DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"
X_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
SHORT_DATE_FORMAT = "%Y%m%d"


def _hmac(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def _utc_now() -> datetime:
    return datetime.now(UTC)


class VolcRequestSigner:
    """Assina requisições com access key / secret key.

    Args:
        access_key: AK da conta
        secret_key: SK da conta
        host: Host assinado (header Host)
        region: Região do escopo
        service: Serviço do escopo
        content_type: Content-Type assinado
        clock: Fonte de tempo UTC (injetável em testes)
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        *,
        host: str = VEGAME_HOST,
        region: str = VEGAME_REGION,
        service: str = VEGAME_SERVICE,
        content_type: str = DEFAULT_CONTENT_TYPE,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not access_key:
            raise ConfigError("No access_key configured.")
        if not secret_key:
            raise ConfigError("No secret_key configured.")
        self._access_key = access_key
        self._secret_key = secret_key
        self._host = host
        self._region = region
        self._service = service
        self._content_type = content_type
        self._clock = clock

    @property
    def host(self) -> str:
        return self._host

    @property
    def content_type(self) -> str:
        return self._content_type

    def signing_key(self, short_date: str) -> bytes:
        k_date = _hmac(self._secret_key.encode("utf-8"), short_date)
        k_region = _hmac(k_date, self._region)
        k_service = _hmac(k_region, self._service)
        return _hmac(k_service, SCOPE_TERMINATOR)

    def sign(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: bytes = b"",
        now: datetime | None = None,
    ) -> SigningContext:
        """Calcula a assinatura. Função pura para um mesmo `now`."""
        moment = now or self._clock()
        if moment.tzinfo is not None:
            moment = moment.astimezone(UTC)
        x_date = moment.strftime(X_DATE_FORMAT)
        short_date = moment.strftime(SHORT_DATE_FORMAT)

        method = method.upper()
        path = path or "/"
        query_string = canonical_query(query)
        content_hash = sha256_hex(body)
        headers_block = canonical_headers(self._host, x_date, content_hash, self._content_type)

        canonical_request = "\n".join(
            [method, path, query_string, headers_block, SIGNED_HEADERS, content_hash]
        )
        credential_scope = f"{short_date}/{self._region}/{self._service}/{SCOPE_TERMINATOR}"
        string_to_sign = "\n".join(
            [SIGNING_ALGORITHM, x_date, credential_scope, sha256_hex(canonical_request)]
        )
        signature = hmac.new(
            self.signing_key(short_date),
            string_to_sign.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
        authorization = (
            f"{SIGNING_ALGORITHM} Credential={self._access_key}/{credential_scope}, "
            f"SignedHeaders={SIGNED_HEADERS}, Signature={signature}"
        )

        return SigningContext(
            method=method,
            path=path,
            query=query_string,
            x_date=x_date,
            short_date=short_date,
            content_hash=content_hash,
            canonical_request=canonical_request,
            credential_scope=credential_scope,
            string_to_sign=string_to_sign,
            signature=signature,
            authorization=authorization,
        )

    def signed_headers(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: bytes = b"",
        now: datetime | None = None,
    ) -> dict[str, str]:
        """Headers prontos para envio; X-Date é o mesmo instante assinado."""
        context = self.sign(method, path, query, body, now)
        return {
            "Host": self._host,
            "Content-Type": self._content_type,
            "X-Date": context.x_date,
            "X-Content-Sha256": context.content_hash,
            "Authorization": context.authorization,
        }
