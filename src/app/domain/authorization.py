"""Resultado de autorização de um authorizer na Open Platform."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Authorization(BaseModel):
    """Wrapper do `authorization_info` retornado pela plataforma."""

    authorization_info: dict[str, Any] = Field(default_factory=dict)

    @property
    def app_id(self) -> str:
        return str(self.authorization_info.get("authorizer_appid") or "")

    @property
    def access_token(self) -> str:
        return str(self.authorization_info.get("authorizer_access_token") or "")

    @property
    def refresh_token(self) -> str:
        return str(self.authorization_info.get("authorizer_refresh_token") or "")
