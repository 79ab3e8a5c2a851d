"""Run the API checker server: ``python -m apichecker``."""

import logging

import uvicorn

from apichecker.config import settings
from apichecker.main import API_VERSION, app

logger = logging.getLogger("apichecker")


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "starting server: version=%s addr=%s:%d", API_VERSION, settings.host, settings.port
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":  # pragma: no cover - manual runtime entrypoint
    main()
