"""Starting HTTP servers on ports."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from aiohttp import web

from apigen.errors import ConnectionFailure
from apigen.notifier import NotificationError, Notifier

logger = logging.getLogger(__name__)

_BOUND = object()


@dataclass(eq=False)
class Connection:
    """A running server, represented by the task or future that serves it."""

    task: asyncio.Future

    def stop(self) -> None:
        """Stop serving; the task finishes once the server has shut down."""
        self.task.cancel()


class ConnectionEstablisher(ABC):
    """Starts an application listening on a port."""

    @abstractmethod
    async def connect(self, port: str, app: web.Application) -> Connection:
        """Serve app on port; raise ConnectionFailure if that is impossible."""


class TcpConnectionEstablisher(ConnectionEstablisher):
    """Serves applications over TCP on the given host."""

    def __init__(self, host: str = "0.0.0.0") -> None:
        self.host = host

    async def connect(self, port: str, app: web.Application) -> Connection:
        logger.info("Establishing connection on port %s.", port)
        notifier: Notifier[object] = Notifier()
        task = asyncio.create_task(self._serve(port, app, notifier))
        try:
            outcome = await notifier.await_notification()
        except NotificationError:
            raise ConnectionFailure("Something went wrong!") from None
        if isinstance(outcome, BaseException):
            raise ConnectionFailure(
                f"Failed to establish connection, {outcome}"
            ) from outcome
        return Connection(task)

    async def _serve(
        self, port: str, app: web.Application, notifier: Notifier[object]
    ) -> None:
        try:
            port_number = int(port)
        except ValueError as err:
            notifier.notify(err)
            return

        runner = web.AppRunner(app, handle_signals=False)
        await runner.setup()
        try:
            await web.TCPSite(runner, self.host, port_number).start()
        except Exception as err:
            await runner.cleanup()
            notifier.notify(err)
            return

        notifier.notify(_BOUND)
        try:
            await asyncio.Event().wait()
        finally:
            await runner.cleanup()