"""The registration API: register mock responses and list what is served."""

from __future__ import annotations

import argparse
import json
import logging

from aiohttp import web

from apigen.app_state import AppState
from apigen.connection import TcpConnectionEstablisher
from apigen.errors import ApiError, JsonParseError
from apigen.http_trace import setup_logging, tracing_middleware
from apigen.models import RegistrationRequest, RegistrationResponse
from apigen.server import restart

logger = logging.getLogger(__name__)

APP_STATE = web.AppKey("app_state", AppState)

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
HEALTH_MESSAGE = "Up and running..."


def _failure(error: ApiError) -> web.Response:
    return web.json_response(error.to_json(), status=error.status_code)


async def _read_registration(request: web.Request) -> RegistrationRequest:
    try:
        body = await request.read()
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as err:
        message = f"Failed to parse the request body as JSON: {err}"
        logger.error(
            "Unexpected JSON received in body for [%s](%s), %s",
            request.method,
            request.rel_url,
            message,
        )
        raise JsonParseError(message) from None
    try:
        return RegistrationRequest.from_json(data)
    except JsonParseError as err:
        logger.error(
            "Unexpected JSON received in body for [%s](%s), %s",
            request.method,
            request.rel_url,
            err.message,
        )
        raise


async def health(request: web.Request) -> web.Response:
    """Report that the API is running."""
    return web.Response(text=HEALTH_MESSAGE)


async def register_endpoint(request: web.Request) -> web.Response:
    """Register a response and (re)start the server on the requested port."""
    app_state: AppState = request.app[APP_STATE]
    try:
        registration_request = await _read_registration(request)
    except ApiError as err:
        return _failure(err)

    port = registration_request.port
    server = app_state.remove_server(port)
    removed = (
        server.get_registration(registration_request.path, registration_request.method)
        if server is not None
        else None
    )

    try:
        new_server = await restart(
            server, app_state.connection_establisher, registration_request
        )
    except ApiError as err:
        return _failure(err)

    app_state.add_server(port, new_server)
    response = RegistrationResponse.from_request(registration_request, removed)
    return web.json_response(response.to_json(), status=200)


async def list_registrations(request: web.Request) -> web.Response:
    """List the registrations of every running server."""
    app_state: AppState = request.app[APP_STATE]
    registrations = app_state.get_registrations()
    return web.json_response([r.to_json() for r in registrations], status=200)


def create_app(port: str, app_state: AppState) -> web.Application:
    """Build the registration API application for the given state."""
    app = web.Application(middlewares=[tracing_middleware(str(port))])
    app[APP_STATE] = app_state
    app.router.add_get("/health", health)
    app.router.add_post("/register", register_endpoint)
    app.router.add_get("/info", list_registrations)
    return app


def main(argv: list[str] | None = None) -> None:
    """Run the registration API."""
    parser = argparse.ArgumentParser(description="Serve mock HTTP endpoints on demand.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    setup_logging()
    app_state = AppState(TcpConnectionEstablisher())
    app = create_app(str(args.port), app_state)
    web.run_app(app, host=args.host, port=args.port, print=None)


if __name__ == "__main__":
    main()