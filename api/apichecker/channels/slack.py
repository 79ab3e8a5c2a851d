"""Slack Web API channel."""

import logging
from typing import Any

import httpx

from apichecker.channels import FileUpload
from apichecker.errors import NotificationError

logger = logging.getLogger(__name__)


class SlackChannel:
    """
    Minimal Slack Web API client bound to one channel.

    Uses the bot token for every call. File uploads go through the external
    upload flow (get upload URL, send content, complete upload).
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        channel_id: str,
        token: str,
        api_url: str = "https://slack.com/api/",
        timeout: float = 10,
    ):
        self.client = client
        self.channel_id = channel_id
        self.token = token
        self.api_url = api_url.rstrip("/") + "/"
        self.timeout = timeout

    async def _call(self, method: str, **kwargs) -> dict[str, Any]:
        try:
            response = await self.client.post(
                self.api_url + method,
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=self.timeout,
                **kwargs,
            )
        except httpx.HTTPError as exc:
            raise NotificationError(f"{method}: {exc}") from exc

        if response.status_code >= 400:
            raise NotificationError(
                f"{method} returned status {response.status_code}: {response.text[:200]}"
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise NotificationError(f"{method} returned invalid JSON: {exc}") from exc
        if not data.get("ok"):
            raise NotificationError(f"{method} failed: {data.get('error', 'unknown_error')}")
        return data

    async def post_message(self, text: str) -> dict[str, Any]:
        data = await self._call(
            "chat.postMessage",
            json={"channel": self.channel_id, "text": text},
        )
        logger.info("Posted message to Slack channel %s (ts=%s)", self.channel_id, data.get("ts"))
        return data

    async def upload_file(self, upload: FileUpload, initial_comment: str = "") -> dict[str, Any]:
        ticket = await self._call(
            "files.getUploadURLExternal",
            data={"filename": upload.filename, "length": str(len(upload.content))},
        )

        upload_url = ticket.get("upload_url")
        file_id = ticket.get("file_id")
        if not upload_url or not file_id:
            raise NotificationError("files.getUploadURLExternal returned no upload_url")

        try:
            response = await self.client.post(
                upload_url,
                content=upload.content,
                headers={"Content-Type": upload.content_type},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise NotificationError(f"file upload: {exc}") from exc
        if response.status_code >= 400:
            raise NotificationError(f"file upload returned status {response.status_code}")

        completion = {
            "files": [{"id": file_id, "title": upload.title}],
            "channel_id": self.channel_id,
        }
        if initial_comment:
            completion["initial_comment"] = initial_comment
        data = await self._call("files.completeUploadExternal", json=completion)

        logger.info(
            "Uploaded %s to Slack channel %s (file_id=%s)",
            upload.filename,
            self.channel_id,
            file_id,
        )
        return data
