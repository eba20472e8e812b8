"""A one-shot notification carrying a value to an awaiting task."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Generic, TypeVar

from apigen.lock import RwLock, safe_read, safe_write

T = TypeVar("T")

_EMPTY = object()


class NotifierState(Enum):
    PENDING = "pending"
    NOTIFIED = "notified"
    CORRUPTED = "corrupted"


class NotificationError(Exception):
    """Base class for notification failures."""


class AlreadyFiredError(NotificationError):
    """The notifier has already been fired once."""


class NoAvailableDataError(NotificationError):
    """The notification carries no data, or it was already taken."""


class Notifier(Generic[T]):
    """Fires once with a value that one awaiting task can take."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._data: RwLock[object] = RwLock(_EMPTY)
        self._state: RwLock[NotifierState] = RwLock(NotifierState.PENDING)

    @property
    def state(self) -> NotifierState:
        result = safe_read(self._state, lambda guard: guard.value)
        return NotifierState.CORRUPTED if result is None else result

    def notify(self, data: T) -> None:
        """Store data and wake waiters; raise AlreadyFiredError if fired before."""
        if self.state is not NotifierState.PENDING:
            raise AlreadyFiredError("notification already fired")

        def store(guard):
            guard.value = data
            return True

        stored = safe_write(self._data, store)
        new_state = NotifierState.NOTIFIED if stored else NotifierState.CORRUPTED

        def update(guard):
            guard.value = new_state

        safe_write(self._state, update)
        self._event.set()

    async def await_notification(self) -> T:
        """Wait for the notification and take its data."""
        while self.state is NotifierState.PENDING:
            await self._event.wait()

        if self.state is NotifierState.CORRUPTED:
            raise NoAvailableDataError("notifier is corrupted")

        def take(guard):
            value, guard.value = guard.value, _EMPTY
            return value

        data = safe_write(self._data, take)
        if data is None or data is _EMPTY:
            raise NoAvailableDataError("no data available")
        return data