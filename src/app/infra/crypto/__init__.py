"""Criptografia dos webhooks Douyin.

- aes_cbc: cifra simétrica AES-128-CBC (base64)
- signature: assinatura SHA-1 do envelope {token, timestamp, nonce, ciphertext}
"""

from .aes_cbc import decrypt, encrypt
from .constants import AES_BLOCK_SIZE, AES_KEY_SIZE, ZERO_IV
from .signature import compute_webhook_signature, is_valid_webhook_signature

__all__ = [
    "AES_BLOCK_SIZE",
    "AES_KEY_SIZE",
    "ZERO_IV",
    "compute_webhook_signature",
    "decrypt",
    "encrypt",
    "is_valid_webhook_signature",
]
