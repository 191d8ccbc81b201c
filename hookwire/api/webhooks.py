"""
GitHub webhook delivery endpoints
"""

import json

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from hookwire.models.hooks import PingPayload

router = APIRouter()
logger = structlog.get_logger()

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("/ping", methods=ALL_METHODS)
async def ping(request: Request) -> Response:
    """
    Decode a ping delivery; malformed bodies are answered with 400
    """
    body = await request.body()
    try:
        data = json.loads(body)
        payload = PingPayload() if data is None else PingPayload.model_validate(data)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        logger.warning("Failed to parse ping payload", error=str(e))
        return PlainTextResponse(str(e), status_code=400)

    logger.info("Received GitHub ping", hook_id=payload.hook_id, zen=payload.zen)
    return Response(status_code=200)


@router.api_route("/{path:path}", methods=ALL_METHODS)
async def github_webhook(request: Request, path: str) -> Response:
    """
    Accept any delivery. Nothing is dispatched yet: the event header and
    delivery id are logged and the request is acknowledged.
    """
    logger.info(
        "Received GitHub webhook",
        path="/" + path,
        event_type=request.headers.get("X-GitHub-Event", "unknown"),
        delivery_id=request.headers.get("X-GitHub-Delivery", "unknown"),
    )
    return Response(status_code=200)
