"""Notification dispatcher."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from apichecker.channels import FileUpload, Notification
from apichecker.channels.slack import SlackChannel
from apichecker.config import Settings
from apichecker.errors import NotificationError, SerializationError
from apichecker.fetcher import FetchResult

logger = logging.getLogger(__name__)

JST = timezone(timedelta(hours=9), "Asia/Tokyo")

RESPONSE_FILENAME = "response.json"
RESPONSE_CONTENT_TYPE = "application/json"


def result_title(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return "Result " + now.astimezone(JST).strftime("(%Y-%m-%d %H:%M)")


def build_notification(
    message: str,
    result: Optional[FetchResult] = None,
    now: Optional[datetime] = None,
) -> Notification:
    """Attach the fetch result as ``response.json`` when one is given."""
    if result is None:
        return Notification(message=message)

    try:
        payload = result.to_json()
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc

    return Notification(
        message=message,
        file=FileUpload(
            filename=RESPONSE_FILENAME,
            content=payload.encode("utf-8"),
            content_type=RESPONSE_CONTENT_TYPE,
            title=result_title(now),
        ),
    )


async def dispatch_notification(
    settings: Settings,
    client: httpx.AsyncClient,
    notification: Notification,
) -> bool:
    """
    Send the notification to the configured Slack channel.

    Returns False without sending when the channel or token is not
    configured. Delivery errors propagate as NotificationError; the whole
    delivery is bounded by ``notify_timeout``.
    """
    if not settings.notification_enabled:
        logger.debug("Slack channel or token not configured, skipping notification")
        return False

    channel = SlackChannel(
        client,
        channel_id=settings.slack_channel,
        token=settings.slack_token,
        api_url=settings.slack_api_url,
        timeout=settings.notify_timeout,
    )
    if notification.file is not None:
        delivery = channel.upload_file(notification.file, initial_comment=notification.message)
    else:
        delivery = channel.post_message(notification.message)

    try:
        await asyncio.wait_for(delivery, settings.notify_timeout)
    except asyncio.TimeoutError as exc:
        raise NotificationError(f"timed out after {settings.notify_timeout}s") from exc
    return True
