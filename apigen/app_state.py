"""State shared by the registration API: the servers running on each port."""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from apigen.connection import ConnectionEstablisher
from apigen.lock import RwLock, safe_read, safe_write
from apigen.models import ServerRegistration
from apigen.server import Server

E = TypeVar("E", bound=ConnectionEstablisher)

logger = logging.getLogger(__name__)


class AppState(Generic[E]):
    """Holds the running servers, keyed by port."""

    def __init__(self, connection_establisher: E) -> None:
        self.connection_establisher = connection_establisher
        self._servers: RwLock[dict[str, Server]] = RwLock({})

    def add_server(self, port: str, server: Server) -> None:
        logger.info("Adding server at port %s.", port)

        def insert(guard) -> None:
            guard.value[port] = server

        safe_write(self._servers, insert)

    def remove_server(self, port: str) -> Server | None:
        """Remove and stop the server on port, returning it if there was one."""
        logger.info("Removing server at port %s.", port)

        def take(guard) -> Server | None:
            server = guard.value.pop(port, None)
            if server is not None:
                server.stop()
            return server

        return safe_write(self._servers, take)

    def get_registrations(self) -> list[ServerRegistration]:
        logger.info("Collecting information about all registrations.")
        registrations = safe_read(
            self._servers,
            lambda guard: [s.get_registrations() for s in guard.value.values()],
        )
        return registrations if registrations is not None else []