"""Mock servers serving registered responses on one port."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from aiohttp import web

from apigen.connection import Connection, ConnectionEstablisher
from apigen.http_method import HttpMethod
from apigen.http_trace import tracing_middleware
from apigen.models import Registration, RegistrationRequest, ServerRegistration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationIdentifier:
    """The method and path a response is registered for."""

    path: str
    method: HttpMethod


@dataclass(eq=False)
class Server:
    """A running server and the responses it serves."""

    connection: Connection
    port: str
    data: dict[RegistrationIdentifier, Any] = field(default_factory=dict)

    def stop(self) -> None:
        self.connection.stop()

    def get_registration(self, path: str, method: HttpMethod) -> Registration | None:
        """Return the registration for method and path, if there is one."""
        identifier = RegistrationIdentifier(path, method)
        if identifier not in self.data:
            return None
        return Registration(method=method, path=path, response=self.data[identifier])

    def get_registrations(self) -> ServerRegistration:
        logger.info(
            "Collecting information about registrations at server on port %s.",
            self.port,
        )
        return ServerRegistration(
            port=self.port,
            registrations=[
                Registration(method=ident.method, path=ident.path, response=response)
                for ident, response in self.data.items()
            ],
        )


def _responder(value: Any):
    async def respond(request: web.Request) -> web.Response:
        return web.json_response(value)

    return respond


def build_router(port: str, data: dict[RegistrationIdentifier, Any]) -> web.Application:
    """Build an application answering each registration with its JSON response."""
    app = web.Application(middlewares=[tracing_middleware(port)])
    for identifier, response in data.items():
        app.router.add_route(str(identifier.method), identifier.path, _responder(response))
    return app


async def restart(
    server: Server | None,
    connection_establisher: ConnectionEstablisher,
    registration_request: RegistrationRequest,
) -> Server:
    """Start a server for the request, keeping the registrations of server if any."""
    port = registration_request.port
    if server is None:
        logger.info("Starting a server on port %s.", port)
        data: dict[RegistrationIdentifier, Any] = {}
    else:
        logger.info("Restarting the server on port %s.", port)
        server.stop()
        await asyncio.wait({server.connection.task})
        data, server.data = server.data, {}

    method = registration_request.method
    path = registration_request.path
    logger.info("Registering route [%s (@%s)] %s.", method, port, path)

    data[RegistrationIdentifier(path, method)] = registration_request.response
    app = build_router(port, data)
    connection = await connection_establisher.connect(port, app)
    return Server(connection=connection, port=port, data=data)