"""Mensagem de webhook (evento de callback) da plataforma.

Campos conhecidos são explícitos; o restante fica em `extra` para
compatibilidade com eventos novos.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

# Tag XML/JSON -> atributo do modelo
KNOWN_FIELDS: dict[str, str] = {
    "ToUserName": "to_user_name",
    "FromUserName": "from_user_name",
    "CreateTime": "create_time",
    "MsgType": "msg_type",
    "Event": "event",
    "InfoType": "info_type",
    "Encrypt": "encrypt",
}


class WebhookMessage(BaseModel):
    """Mensagem mutável lida pelos handlers durante um único request."""

    to_user_name: str | None = None
    from_user_name: str | None = None
    create_time: str | None = None
    msg_type: str | None = None
    event: str | None = None
    info_type: str | None = None
    encrypt: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, fields: Mapping[str, Any]) -> WebhookMessage:
        message = cls()
        message.merge(fields)
        return message

    def merge(self, fields: Mapping[str, Any]) -> WebhookMessage:
        """Mescla campos (ex.: payload descriptografado) na mensagem."""
        for name, value in fields.items():
            attr = KNOWN_FIELDS.get(name)
            if attr is None:
                self.extra[name] = value
            else:
                setattr(self, attr, None if value is None else str(value))
        return self

    def get(self, name: str, default: Any = None) -> Any:
        """Lê um campo pelo nome do protocolo (ex.: "InfoType")."""
        attr = KNOWN_FIELDS.get(name)
        if attr is not None:
            value = getattr(self, attr)
            return default if value is None else value
        return self.extra.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Representação com os nomes do protocolo."""
        result: dict[str, Any] = {}
        for name, attr in KNOWN_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                result[name] = value
        result.update(self.extra)
        return result
