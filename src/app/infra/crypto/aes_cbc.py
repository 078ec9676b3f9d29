"""Cifra simétrica AES-128-CBC com padding PKCS#7 e saída base64.

Par de funções puras: nenhum efeito colateral além de CPU.
O IV padrão é um vetor de zeros; quem descriptografa precisa usar o mesmo IV
da criptografia.
"""

from __future__ import annotations

import base64
import binascii

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from app.infra.crypto.constants import AES_BLOCK_SIZE, AES_KEY_SIZE, ZERO_IV
from utils.errors import CryptoError


def _to_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def _build_cipher(key: str | bytes, iv: str | bytes | None) -> Cipher:
    key_bytes = _to_bytes(key)
    iv_bytes = ZERO_IV if not iv else _to_bytes(iv)

    if len(key_bytes) != AES_KEY_SIZE:
        raise CryptoError(f"Invalid AES key size: {len(key_bytes)}")
    if len(iv_bytes) != AES_BLOCK_SIZE:
        raise CryptoError(f"Invalid IV size: {len(iv_bytes)}")

    return Cipher(algorithms.AES(key_bytes), modes.CBC(iv_bytes))


def encrypt(plaintext: str | bytes, key: str | bytes, iv: str | bytes | None = None) -> str:
    """Criptografa e retorna ciphertext em base64.

    Args:
        plaintext: Texto a cifrar
        key: Chave de 16 bytes
        iv: IV de 16 bytes (padrão: zeros)

    Raises:
        CryptoError: Se chave/IV inválidos ou a primitiva falhar
    """
    cipher = _build_cipher(key, iv)
    try:
        padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
        padded = padder.update(_to_bytes(plaintext)) + padder.finalize()
        encryptor = cipher.encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except ValueError as exc:
        raise CryptoError(f"Encrypt AES CBC error: {exc}") from exc
    return base64.b64encode(ciphertext).decode("ascii")


def decrypt(ciphertext: str | bytes, key: str | bytes, iv: str | bytes | None = None) -> str:
    """Descriptografa ciphertext base64 e retorna o plaintext UTF-8.

    Raises:
        CryptoError: Base64 inválido, ciphertext corrompido ou padding inválido
    """
    cipher = _build_cipher(key, iv)
    try:
        raw = base64.b64decode(ciphertext, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise CryptoError(f"Invalid base64 ciphertext: {exc}") from exc

    if not raw or len(raw) % AES_BLOCK_SIZE:
        raise CryptoError("Decrypt AES CBC error: ciphertext length is not a multiple of block size")

    try:
        decryptor = cipher.decryptor()
        padded = decryptor.update(raw) + decryptor.finalize()
        unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return plaintext.decode("utf-8")
    except (ValueError, UnicodeDecodeError) as exc:
        raise CryptoError(f"Decrypt AES CBC error: {exc}") from exc
