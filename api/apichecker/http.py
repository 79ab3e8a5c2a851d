"""Outbound HTTP client."""

from typing import AsyncIterator

import httpx
from fastapi import Request

USER_AGENT = "api-checker"


def http_client(
    timeout: float = 10,
    follow_redirects: bool = True,
    **kwargs,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=follow_redirects,
        headers={"User-Agent": USER_AGENT},
        **kwargs,
    )


async def get_http_client(request: Request) -> AsyncIterator[httpx.AsyncClient]:
    """One client per inbound request, closed when the request ends."""
    settings = request.app.state.settings
    async with http_client(timeout=settings.fetch_timeout) as client:
        yield client
