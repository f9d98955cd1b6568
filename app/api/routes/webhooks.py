"""
Authorize.Net webhook receiver.

Notifications are logged and acknowledged. Nothing is verified or acted on yet.
"""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook", response_class=PlainTextResponse)
async def receive_webhook(request: Request) -> PlainTextResponse:
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else None
    except (ValueError, RecursionError):
        body = None

    if isinstance(body, dict):
        logger.info(
            "Webhook received eventType=%s notificationId=%s: %s",
            body.get("eventType"),
            body.get("notificationId"),
            body,
        )
    else:
        logger.info("Webhook received (%d bytes): %r", len(raw), raw[:500])

    return PlainTextResponse("OK", status_code=200)
