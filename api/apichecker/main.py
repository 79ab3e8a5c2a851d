import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apichecker.config import Settings, settings as default_settings
from apichecker.errors import CheckerError, ClientInputError, MethodNotAllowedError
from apichecker.middleware import RequestSizeLimitMiddleware
from apichecker.routers import check

API_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="API Checker",
        description="Call an API, run a jq query on the response and notify Slack when it is true.",
        version=API_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    app.add_middleware(RequestSizeLimitMiddleware, max_body_size=settings.max_body_size)

    # --- Exception Handlers ---

    @app.exception_handler(CheckerError)
    async def checker_exception_handler(request: Request, exc: CheckerError):
        if isinstance(exc, ClientInputError):
            logger.warning("%s: %s (%s)", exc.step, exc.message, exc.detail)
        else:
            logger.error("%s: %s (%s)", exc.step, exc.message, exc.detail, exc_info=exc)
        return PlainTextResponse(f"{exc.message}\n", status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            logger.warning("decode: %s (%s)", MethodNotAllowedError.message, request.method)
            message = MethodNotAllowedError.message
        else:
            message = exc.detail
        return PlainTextResponse(
            f"{message}\n", status_code=exc.status_code, headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error", exc_info=exc)
        return PlainTextResponse("internal server error\n", status_code=500)

    # --- Routes ---

    app.include_router(check.router)

    return app


app = create_app()
