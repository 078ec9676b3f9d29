"""STS token do VeGame, obtido por requisição assinada."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.domain.credential import Credential
from app.infra.signing.canonical import canonical_query
from app.infra.tokens.base import CachedAccessToken, dig
from config.settings.vegame import VEGAME_HOST

if TYPE_CHECKING:
    from app.protocols.signer import RequestSignerProtocol
    from app.protocols.cache import CredentialCacheProtocol
    from app.protocols.http_client import TransportProtocol

STS_ACTION = "STSToken"
DEFAULT_STS_EXPIRE_SECONDS = 300


def parse_expire_at(value: Any) -> float | None:
    """`expire_at` absoluto: epoch (s ou ms) ou ISO-8601 (sem offset = UTC)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value / 1000 if value > 1e12 else float(value)
    if isinstance(value, str) and value:
        if value.isdigit():
            return parse_expire_at(int(value))
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed.timestamp()
    return None


class STSToken(CachedAccessToken):
    """STS token lido de `Result.token` com expiração absoluta `Result.expire_at`.

    A query leva `ak`/`sk` porque é assim que o endpoint STSToken identifica a conta.
    """

    token_field = "token"

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        version: str,
        signer: RequestSignerProtocol,
        cache: CredentialCacheProtocol,
        http_client: TransportProtocol,
        *,
        expire_seconds: int = DEFAULT_STS_EXPIRE_SECONDS,
        safety_margin_seconds: int = 0,
    ) -> None:
        super().__init__(cache, http_client, safety_margin_seconds=safety_margin_seconds)
        self._access_key = access_key
        self._secret_key = secret_key
        self._version = version
        self._signer = signer
        self._expire_seconds = expire_seconds

    def get_key(self) -> str:
        return f"douyin_vegame:{self._access_key}_{self._secret_key}:sts_token"

    async def _exchange(self) -> Credential:
        query = {
            "Action": STS_ACTION,
            "Version": self._version,
            "ak": self._access_key,
            "sk": self._secret_key,
            "expire": self._expire_seconds,
        }
        headers = self._signer.signed_headers("GET", "/", query)
        response = await self._http.request(
            "GET",
            f"https://{self._signer.host or VEGAME_HOST}/?{canonical_query(query)}",
            headers=headers,
        )
        payload = response.to_dict(strict=False)
        token = dig(payload, "Result", "token")
        expire_at = parse_expire_at(dig(payload, "Result", "expire_at"))
        if expire_at is None:
            # sem expire_at usa a validade pedida
            return self._credential(response, token, self._expire_seconds)
        credential = self._credential(response, token, 0)
        return Credential(credential.value, expire_at - self._safety_margin)
