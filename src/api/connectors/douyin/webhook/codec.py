"""Verificação e descriptografia de envelopes de webhook.

Estados: recebido -> verificado -> descriptografado. A verificação de
assinatura sempre roda antes de qualquer tentativa de descriptografia.
"""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from api.connectors.douyin.webhook.parser import BodyParseError, parse_fields
from api.connectors.douyin.webhook.reply import render_xml
from app.domain.messages import WebhookMessage
from app.infra.crypto import aes_cbc
from app.infra.crypto.signature import compute_webhook_signature, is_valid_webhook_signature
from utils.errors import BadRequestError, ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WebhookEnvelope:
    """Tupla que acompanha cada chamada inbound."""

    signature: str
    timestamp: str
    nonce: str
    ciphertext: str

    @classmethod
    def from_query(cls, query: Mapping[str, Any], ciphertext: str) -> WebhookEnvelope:
        return cls(
            signature=str(query.get("signature") or ""),
            timestamp=str(query.get("timestamp") or ""),
            nonce=str(query.get("nonce") or ""),
            ciphertext=ciphertext,
        )


def verify_signature(
    token: str,
    ciphertext: str,
    signature: str,
    timestamp: str | int,
    nonce: str,
) -> None:
    """Valida a assinatura SHA-1 do envelope.

    Raises:
        BadRequestError: Assinatura vazia ou divergente
    """
    if not signature:
        raise BadRequestError("Request signature must not be empty.")
    if not is_valid_webhook_signature(signature, token, timestamp, nonce, ciphertext):
        raise BadRequestError("Invalid request signature.")


def decrypt_and_parse(
    ciphertext: str,
    key: str | bytes,
    iv: str | bytes | None = None,
) -> dict[str, Any]:
    """Descriptografa e converte o texto em campos.

    CryptoError propaga; texto não parseável vira mapeamento vazio.
    """
    plaintext = aes_cbc.decrypt(ciphertext, key, iv)
    try:
        return parse_fields(plaintext)
    except BodyParseError:
        logger.warning("webhook_plaintext_unparseable")
        return {}


class WebhookCodec:
    """Codec de envelopes com token e chave AES de uma conta."""

    def __init__(self, token: str, aes_key: str | bytes, iv: str | bytes | None = None) -> None:
        if not token:
            raise ConfigError("No token configured.")
        if not aes_key:
            raise ConfigError("No aes_key configured.")
        self._token = token
        self._aes_key = aes_key
        self._iv = iv

    @property
    def token(self) -> str:
        return self._token

    def verify_signature(
        self,
        ciphertext: str,
        signature: str,
        timestamp: str | int,
        nonce: str,
    ) -> None:
        verify_signature(self._token, ciphertext, signature, timestamp, nonce)

    def decrypt_and_parse(self, ciphertext: str) -> dict[str, Any]:
        return decrypt_and_parse(ciphertext, self._aes_key, self._iv)

    def decrypt_message(
        self,
        message: WebhookMessage,
        signature: str,
        timestamp: str | int,
        nonce: str,
    ) -> WebhookMessage:
        """Verifica o envelope e mescla o payload descriptografado na mensagem."""
        ciphertext = message.encrypt or ""
        self.verify_signature(ciphertext, signature, timestamp, nonce)
        if not ciphertext:
            return message
        return message.merge(self.decrypt_and_parse(ciphertext))

    def encrypt_reply(
        self,
        fields: Mapping[str, Any],
        timestamp: str | int | None = None,
        nonce: str | None = None,
    ) -> str:
        """Cifra a resposta e a embrulha no envelope XML assinado."""
        timestamp = str(timestamp or int(time.time()))
        nonce = nonce or secrets.token_hex(8)
        ciphertext = aes_cbc.encrypt(render_xml(fields), self._aes_key, self._iv)
        return render_xml(
            {
                "Encrypt": ciphertext,
                "MsgSignature": compute_webhook_signature(self._token, timestamp, nonce, ciphertext),
                "TimeStamp": timestamp,
                "Nonce": nonce,
            }
        )
