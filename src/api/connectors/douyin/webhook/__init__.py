"""Webhook Douyin: envelope assinado (SHA-1) com payload AES-128-CBC."""

from api.connectors.douyin.webhook.codec import (
    WebhookCodec,
    WebhookEnvelope,
    decrypt_and_parse,
    verify_signature,
)
from api.connectors.douyin.webhook.parser import BodyParseError, parse_fields
from api.connectors.douyin.webhook.server import SUCCESS_REPLY, WebhookResponse, WebhookServer

__all__ = [
    "SUCCESS_REPLY",
    "BodyParseError",
    "WebhookCodec",
    "WebhookEnvelope",
    "WebhookResponse",
    "WebhookServer",
    "decrypt_and_parse",
    "parse_fields",
    "verify_signature",
]
