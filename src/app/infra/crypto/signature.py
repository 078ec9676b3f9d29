"""Assinatura SHA-1 dos envelopes de webhook.

signature = SHA1(join(sort([token, timestamp, nonce, ciphertext])))
"""

from __future__ import annotations

import hashlib
import hmac


def compute_webhook_signature(
    token: str,
    timestamp: str | int,
    nonce: str,
    ciphertext: str,
) -> str:
    """Calcula o hex digest SHA-1 sobre a tupla ordenada como strings."""
    params = sorted([token, str(timestamp), nonce, ciphertext])
    return hashlib.sha1("".join(params).encode("utf-8")).hexdigest()


def is_valid_webhook_signature(
    signature: str,
    token: str,
    timestamp: str | int,
    nonce: str,
    ciphertext: str,
) -> bool:
    """Compara a assinatura recebida em tempo constante."""
    expected = compute_webhook_signature(token, timestamp, nonce, ciphertext)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
