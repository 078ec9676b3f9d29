"""Assinatura canônica de requisições (HMAC-SHA256)."""

from app.infra.signing.canonical import SigningContext, canonical_query
from app.infra.signing.volc_signer import VolcRequestSigner

__all__ = ["SigningContext", "VolcRequestSigner", "canonical_query"]
