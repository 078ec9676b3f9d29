"""Testes da cifra AES-128-CBC."""

from __future__ import annotations

import base64

import pytest

from app.infra.crypto import aes_cbc
from utils.errors import CryptoError

KEY = "0123456789abcdef"
IV = "fedcba9876543210"


class TestRoundTrip:
    """Criptografar e descriptografar com a mesma chave/IV."""

    @pytest.mark.parametrize(
        "plaintext",
        ["", "a", "x" * 16, "<xml><InfoType>authorized</InfoType></xml>", "抖音 开放平台"],
    )
    def test_round_trip_with_explicit_iv(self, plaintext: str) -> None:
        ciphertext = aes_cbc.encrypt(plaintext, KEY, IV)
        assert aes_cbc.decrypt(ciphertext, KEY, IV) == plaintext

    def test_round_trip_with_default_zero_iv(self) -> None:
        ciphertext = aes_cbc.encrypt("hello", KEY)
        assert aes_cbc.decrypt(ciphertext, KEY) == "hello"
        assert aes_cbc.decrypt(ciphertext, KEY, b"\x00" * 16) == "hello"

    def test_output_is_base64_of_whole_blocks(self) -> None:
        raw = base64.b64decode(aes_cbc.encrypt("x" * 16, KEY))
        # PKCS#7 adiciona um bloco inteiro quando o texto já é múltiplo de 16
        assert len(raw) == 32

    def test_distinct_plaintexts_give_distinct_ciphertexts(self) -> None:
        assert aes_cbc.encrypt("message-1", KEY) != aes_cbc.encrypt("message-2", KEY)


class TestFailures:
    """Falhas da primitiva viram CryptoError."""

    def test_short_key_raises(self) -> None:
        with pytest.raises(CryptoError, match="key size"):
            aes_cbc.encrypt("data", "short")

    def test_bad_iv_raises(self) -> None:
        with pytest.raises(CryptoError, match="IV size"):
            aes_cbc.decrypt(aes_cbc.encrypt("data", KEY), KEY, "123")

    def test_invalid_base64_raises(self) -> None:
        with pytest.raises(CryptoError):
            aes_cbc.decrypt("@@not-base64@@", KEY)

    def test_truncated_ciphertext_raises(self) -> None:
        raw = base64.b64decode(aes_cbc.encrypt("some longer plaintext", KEY))
        with pytest.raises(CryptoError):
            aes_cbc.decrypt(base64.b64encode(raw[:-3]).decode(), KEY)

