"""Request size limit middleware."""

import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared body is larger than ``max_body_size`` bytes."""

    def __init__(self, app, max_body_size: int = 2 * 1024 * 1024):
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                return PlainTextResponse("invalid content-length\n", status_code=400)
            if size > self.max_body_size:
                logger.warning("Rejected request body of %d bytes (max %d)", size, self.max_body_size)
                return PlainTextResponse("request body too large\n", status_code=413)

        return await call_next(request)
