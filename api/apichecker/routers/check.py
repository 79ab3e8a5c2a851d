import logging
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from apichecker.channels.dispatcher import build_notification, dispatch_notification
from apichecker.config import Settings
from apichecker.errors import InvalidContentTypeError, InvalidPayloadError
from apichecker.fetcher import fetch
from apichecker.http import get_http_client
from apichecker.query import compile_query, evaluate
from apichecker.response import render_result
from apichecker.schemas.check import RequestPayload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["check"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def decode_payload(request: Request) -> RequestPayload:
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("application/json"):
        raise InvalidContentTypeError(content_type)

    try:
        data: Any = await request.json()
        return RequestPayload.model_validate(data)
    except (ValueError, ValidationError) as exc:
        raise InvalidPayloadError(str(exc)) from exc


# ---------------------------------------------------------------------------
# Check: fetch, query, notify
# ---------------------------------------------------------------------------


# Other methods are answered with 405 by the HTTPException handler in main.
@router.post("/{path:path}", summary="Run a check")
async def run_check(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    payload = await decode_payload(request)

    query = compile_query(payload.query)
    data = await fetch(client, payload, timeout=settings.fetch_timeout)

    # libjq is CPU bound; keep it off the event loop
    result = await run_in_threadpool(evaluate, query.steps(data.as_query_input()))
    logger.info("Result: verdict=%s", result.verdict)

    if result.verdict and settings.notification_enabled:
        notification = build_notification(payload.notification_message or "", data)
        await dispatch_notification(settings, client, notification)

    return PlainTextResponse(render_result(result.value))
