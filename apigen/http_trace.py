"""Request/response logging for the HTTP servers, and log setup."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Awaitable, Callable

from aiohttp import web

LOG_LEVEL_ENV_VAR = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "TRACE"

_LEVELS = {
    "TRACE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "OFF": logging.CRITICAL + 10,
}

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def tracing_middleware(port: str):
    """Return a middleware logging each request and its response for a port."""

    @web.middleware
    async def trace(request: web.Request, handler: Handler) -> web.StreamResponse:
        path = str(request.rel_url)
        logger.info("[Request]: [%s (@%s)]: %s.", request.method, port, path)
        started = time.monotonic()
        try:
            response = await handler(request)
        except web.HTTPException as exc:
            _log_response(exc.status, exc.reason, started)
            raise
        _log_response(response.status, response.reason, started)
        return response

    return trace


def _log_response(status: int, reason: str, started: float) -> None:
    latency = int((time.monotonic() - started) * 1000)
    logger.info("[Response]: %s %s (%sms).", status, reason, latency)


def setup_logging() -> int:
    """Configure root logging from the environment and return the chosen level."""
    os.environ.setdefault(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    name = os.environ[LOG_LEVEL_ENV_VAR].split(",")[0].strip().upper()
    level = _LEVELS.get(name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
    return level