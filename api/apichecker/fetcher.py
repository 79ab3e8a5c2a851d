"""Issue the outbound request described by a check payload."""

import asyncio
import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from apichecker.errors import FetchError, InvalidBodyError, InvalidMethodError
from apichecker.schemas.check import RequestPayload

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("HEAD", "GET", "POST", "PUT", "DELETE")
DEFAULT_METHOD = "GET"
DEFAULT_TIMEOUT = 10.0

_PREVIEW_LENGTH = 200


@dataclass(frozen=True)
class Structured:
    """Decoded JSON response body."""
    value: Any

    def as_query_input(self) -> Any:
        return self.value

    def to_json(self) -> str:
        return json.dumps(self.value, indent=2, ensure_ascii=False, allow_nan=False)


@dataclass(frozen=True)
class Raw:
    """Undecoded response body of a non-JSON response."""
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def as_query_input(self) -> Any:
        return self.text

    def to_json(self) -> str:
        return json.dumps(self.text, indent=2, ensure_ascii=False)


FetchResult = Union[Structured, Raw]


def resolve_method(method: Optional[str]) -> str:
    if not method:
        return DEFAULT_METHOD
    if method not in SUPPORTED_METHODS:
        raise InvalidMethodError(f"invalid method: {method}")
    return method


def decode_body(body: Optional[str]) -> Optional[bytes]:
    if not body:
        return None
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidBodyError(f"invalid base64 body: {exc}") from exc


def build_request(client: httpx.AsyncClient, payload: RequestPayload) -> httpx.Request:
    """Build the outbound request. Raises before any network I/O on bad input."""
    method = resolve_method(payload.method)
    content = decode_body(payload.body)

    headers = {}
    if content is not None and payload.content_type:
        headers["Content-Type"] = payload.content_type

    try:
        return client.build_request(method, payload.url, content=content, headers=headers)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
        raise FetchError(f"invalid url {payload.url!r}: {exc}") from exc


def decode_response(response: httpx.Response) -> FetchResult:
    content_type = response.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            return Structured(response.json())
        except ValueError as exc:
            raise FetchError(f"invalid JSON response: {exc}") from exc

    result = Raw(response.content)
    logger.info("response: %s", result.text[:_PREVIEW_LENGTH])
    return result


async def fetch(
    client: httpx.AsyncClient,
    payload: RequestPayload,
    timeout: float = DEFAULT_TIMEOUT,
) -> FetchResult:
    """Send the request and decode the response within ``timeout`` seconds overall."""
    request = build_request(client, payload)
    logger.info("fetch: method=%s url=%s", request.method, request.url)

    try:
        response = await asyncio.wait_for(client.send(request), timeout)
    except asyncio.TimeoutError as exc:
        raise FetchError(f"{request.method} {request.url}: timed out after {timeout}s") from exc
    except httpx.HTTPError as exc:
        raise FetchError(f"{request.method} {request.url}: {exc}") from exc

    logger.info("fetch result: status=%s %s", response.status_code, response.reason_phrase)
    return decode_response(response)
