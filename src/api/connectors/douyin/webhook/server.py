"""Servidor de webhook: handshake, verificação, descriptografia e handlers.

Pipeline de handlers no formato `(message, next) -> reply`. O primeiro handler
(implícito) verifica e descriptografa; cada handler decide entre responder ou
delegar ao próximo. Resposta None/vazia vira "success".
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.connectors.douyin.webhook.parser import BodyParseError, parse_fields
from api.connectors.douyin.webhook.reply import render_xml
from app.domain.messages import WebhookMessage
from utils.errors import BadRequestError

if TYPE_CHECKING:
    from api.connectors.douyin.webhook.codec import WebhookCodec

logger = logging.getLogger(__name__)

SUCCESS_REPLY = "success"

Next = Callable[[WebhookMessage], Awaitable[Any]]
Handler = Callable[[WebhookMessage, Next], Any]


@dataclass(frozen=True, slots=True)
class WebhookResponse:
    """Resposta HTTP produzida pelo servidor."""

    status_code: int
    content: str
    media_type: str = "text/plain"


def _info_type_handler(info_type: str, handler: Handler) -> Handler:
    async def _handler(message: WebhookMessage, next_: Next) -> Any:
        if message.info_type == info_type:
            return await _call(handler, message, next_)
        return await next_(message)

    return _handler


async def _call(handler: Handler, message: WebhookMessage, next_: Next) -> Any:
    result = handler(message, next_)
    if inspect.isawaitable(result):
        result = await result
    return result


class WebhookServer:
    """Servidor de callbacks de uma conta.

    Args:
        codec: Codec da conta; None ativa o modo texto puro (sem cifra)
    """

    def __init__(self, codec: WebhookCodec | None = None) -> None:
        self._codec = codec
        self._handlers: list[Handler] = []

    @property
    def codec(self) -> WebhookCodec | None:
        return self._codec

    def with_handler(self, handler: Handler) -> WebhookServer:
        self._handlers.append(handler)
        return self

    def without_handler(self, handler: Handler) -> WebhookServer:
        self._handlers = [h for h in self._handlers if h is not handler]
        return self

    def handle_authorized(self, handler: Handler) -> WebhookServer:
        return self.with_handler(_info_type_handler("authorized", handler))

    def handle_unauthorized(self, handler: Handler) -> WebhookServer:
        return self.with_handler(_info_type_handler("unauthorized", handler))

    def handle_authorize_updated(self, handler: Handler) -> WebhookServer:
        return self.with_handler(_info_type_handler("updateauthorized", handler))

    def handle_verify_ticket_refreshed(self, handler: Handler) -> WebhookServer:
        return self.with_handler(_info_type_handler("component_verify_ticket", handler))

    @staticmethod
    def parse_message(body: bytes | str) -> WebhookMessage:
        """Converte o corpo bruto em WebhookMessage.

        Raises:
            BadRequestError: Corpo não parseável
        """
        try:
            return WebhookMessage.from_mapping(parse_fields(body))
        except BodyParseError as exc:
            raise BadRequestError(f"Invalid request body: {exc}") from exc

    def decrypt_request_message(self, query: Mapping[str, Any], body: bytes | str) -> WebhookMessage:
        """Mensagem verificada e descriptografada, sem rodar os handlers."""
        message = self.parse_message(body)
        if self._codec is None:
            return message
        return self._codec.decrypt_message(
            message,
            signature=str(query.get("signature") or ""),
            timestamp=str(query.get("timestamp") or ""),
            nonce=str(query.get("nonce") or ""),
        )

    async def serve(self, query: Mapping[str, Any], body: bytes | str = b"") -> WebhookResponse:
        """Processa um request inbound.

        Raises:
            BadRequestError: Assinatura ausente/inválida ou corpo inválido
            CryptoError: Falha ao descriptografar
        """
        echostr = query.get("echostr")
        if echostr:
            logger.info("webhook_handshake")
            return WebhookResponse(200, str(echostr))

        message = self.decrypt_request_message(query, body)
        reply = await self._dispatch(0, message)

        logger.info(
            "webhook_processed",
            extra={"info_type": message.info_type, "msg_type": message.msg_type, "has_reply": bool(reply)},
        )
        return self._to_response(reply, message, query)

    async def _dispatch(self, index: int, message: WebhookMessage) -> Any:
        if index >= len(self._handlers):
            return None

        async def _next(msg: WebhookMessage) -> Any:
            return await self._dispatch(index + 1, msg)

        return await _call(self._handlers[index], message, _next)

    def _to_response(
        self,
        reply: Any,
        message: WebhookMessage,
        query: Mapping[str, Any],
    ) -> WebhookResponse:
        if isinstance(reply, WebhookResponse):
            return reply
        if not reply:
            return WebhookResponse(200, SUCCESS_REPLY)
        if isinstance(reply, str):
            return WebhookResponse(200, reply)
        if not isinstance(reply, Mapping):
            raise TypeError(f"Unsupported webhook reply: {type(reply).__name__}")

        fields = {
            "ToUserName": message.from_user_name,
            "FromUserName": message.to_user_name,
            "CreateTime": message.create_time,
            **reply,
        }
        if self._codec is None:
            return WebhookResponse(200, render_xml(fields), "application/xml")

        content = self._codec.encrypt_reply(fields, nonce=query.get("nonce") or None)
        return WebhookResponse(200, content, "application/xml")
