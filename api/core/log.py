"""
Logging setup and per-request access logging.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger("api.access")


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or settings.log_level(), format=LOG_FORMAT)


def register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request method=%s path=%s status=%s duration_ms=%.1f",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response
