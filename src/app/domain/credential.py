"""Credencial de curta duração emitida pelo provedor."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Credential:
    """Token e instante absoluto de expiração (epoch seconds).

    Um refresh cria uma nova Credential; nunca há mutação in place.
    `issued_at` só existe quando o provedor informa validade relativa.
    """

    value: str
    expires_at: float
    issued_at: float | None = None

    @classmethod
    def from_expires_in(
        cls,
        value: str,
        expires_in: int,
        safety_margin: int = 0,
        now: float | None = None,
    ) -> Credential:
        """Cria credencial a partir do `expires_in` relativo do provedor."""
        issued_at = time.time() if now is None else now
        return cls(value=value, expires_at=issued_at + expires_in - safety_margin, issued_at=issued_at)

    def ttl_seconds(self, now: float | None = None) -> int:
        """TTL restante, truncado em segundos inteiros (pode ser <= 0)."""
        current = time.time() if now is None else now
        return int(self.expires_at - current)

    def cache_ttl_seconds(self) -> int:
        """TTL a gravar no cache logo após a emissão.

        Com validade relativa é exatamente `expires_in - safety_margin`,
        medido no mesmo instante da emissão.
        """
        if self.issued_at is None:
            return self.ttl_seconds()
        return round(self.expires_at - self.issued_at)
