"""Endpoints de webhook Douyin (Open Platform e mini-program).

GET  -> handshake `echostr` ou callback sem corpo
POST -> envelope assinado (SHA-1) com payload AES-128-CBC
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response

from api.connectors.douyin.webhook import WebhookServer
from app.bootstrap import get_mini_program_app, get_open_platform_app
from app.observability import CORRELATION_HEADER, correlation_scope
from utils.errors import BadRequestError, ConfigError, CryptoError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_open_platform_server() -> WebhookServer:
    return get_open_platform_app().get_server()


def get_mini_program_server() -> WebhookServer:
    return get_mini_program_app().get_server()


async def _serve(
    request: Request,
    resolve_server: Callable[[], WebhookServer],
    channel: str,
) -> Response:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            server = resolve_server()
        except ConfigError as exc:
            logger.error(
                "webhook_misconfigured",
                extra={"component": "douyin_webhook", "channel": channel, "error": str(exc)},
            )
            return PlainTextResponse("Webhook misconfigured", status_code=503)

        query = dict(request.query_params)
        body = await request.body()
        try:
            result = await server.serve(query, body)
        except BadRequestError as exc:
            logger.warning(
                "webhook_rejected",
                extra={"component": "douyin_webhook", "channel": channel, "reason": str(exc)},
            )
            return PlainTextResponse(str(exc), status_code=400)
        except CryptoError as exc:
            logger.warning(
                "webhook_decryption_failed",
                extra={"component": "douyin_webhook", "channel": channel, "error_type": type(exc).__name__},
            )
            return PlainTextResponse("Decryption failed", status_code=400)

        return Response(
            content=result.content,
            status_code=result.status_code,
            media_type=result.media_type,
        )


@router.api_route("/open-platform", methods=["GET", "POST"])
async def open_platform_webhook(request: Request) -> Response:
    """Callbacks do componente (authorized, component_verify_ticket, ...)."""
    return await _serve(request, get_open_platform_server, "open_platform")


@router.api_route("/mini-program", methods=["GET", "POST"])
async def mini_program_webhook(request: Request) -> Response:
    """Callbacks do mini-program."""
    return await _serve(request, get_mini_program_server, "mini_program")
