"""Montagem da requisição canônica (HMAC-SHA256, estilo SigV4)."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

SIGNING_ALGORITHM = "HMAC-SHA256"
SIGNED_HEADER_NAMES = ("host", "x-date", "x-content-sha256", "content-type")
SIGNED_HEADERS = ";".join(SIGNED_HEADER_NAMES)
SCOPE_TERMINATOR = "request"


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    # RFC 3986: apenas não-reservados ficam literais
    return quote(str(value), safe="-_.~")


def canonical_query(query: Mapping[str, Any] | None) -> str:
    """Query canônica: codifica, ordena por chave e depois por valor.

    Valores lista/tupla geram um par por item. None é omitido e bool vira
    `true`/`false`. É também a query enviada na URL.
    """
    if not query:
        return ""
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            pairs.append((_encode(key), _encode(item)))
    pairs.sort()
    return "&".join(f"{key}={value}" for key, value in pairs)


def canonical_headers(host: str, x_date: str, content_hash: str, content_type: str) -> str:
    """Bloco de headers na ordem fixa, um `nome:valor\\n` por header."""
    values = (host, x_date, content_hash, content_type)
    return "".join(f"{name}:{value}\n" for name, value in zip(SIGNED_HEADER_NAMES, values))


def sha256_hex(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


@dataclass(frozen=True, slots=True)
class SigningContext:
    """Estado derivado de uma única assinatura. Nunca é reutilizado."""

    method: str
    path: str
    query: str
    x_date: str
    short_date: str
    content_hash: str
    canonical_request: str
    credential_scope: str
    string_to_sign: str
    signature: str
    authorization: str
