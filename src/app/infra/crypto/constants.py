"""Constantes criptográficas dos payloads de webhook."""

AES_KEY_SIZE = 16  # 128 bits (AES-128-CBC)
AES_BLOCK_SIZE = 16  # bytes
ZERO_IV = b"\x00" * AES_BLOCK_SIZE
