"""Usuário autenticado via OAuth Douyin."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field


class DouyinUser(BaseModel):
    """Usuário com campos conhecidos e resíduo em `extra`."""

    open_id: str | None = None
    union_id: str | None = None
    nickname: str | None = None
    avatar: str | None = None
    avatar_larger: str | None = None
    client_key: str | None = None

    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None

    raw: dict[str, Any] = Field(default_factory=dict)
    token_response: dict[str, Any] = Field(default_factory=dict)
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_userinfo(cls, data: Mapping[str, Any]) -> DouyinUser:
        """Mapeia o `data` de oauth/userinfo para o modelo."""
        known = set(cls.model_fields) - {"raw", "token_response", "extra"}
        return cls(
            **{k: data.get(k) for k in known if data.get(k) is not None},
            raw=dict(data),
            extra={k: v for k, v in data.items() if k not in known},
        )
