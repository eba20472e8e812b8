"""A readers-writer lock that is poisoned when a writer fails."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class PoisonError(RuntimeError):
    """The lock was poisoned by a writer that raised."""


class _ReadGuard(Generic[T]):
    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value


class _WriteGuard(Generic[T]):
    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value


class RwLock(Generic[T]):
    """Guards a value for many readers or a single writer."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @contextmanager
    def read(self) -> Iterator[_ReadGuard[T]]:
        """Hold shared access; raise PoisonError if the lock is poisoned."""
        with self._cond:
            self._cond.wait_for(lambda: not self._writer)
            if self._poisoned:
                raise PoisonError("lock poisoned")
            self._readers += 1
        try:
            yield _ReadGuard(self._value)
        finally:
            with self._cond:
                self._readers -= 1
                self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[_WriteGuard[T]]:
        """Hold exclusive access; an exception inside poisons the lock."""
        with self._cond:
            self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            if self._poisoned:
                raise PoisonError("lock poisoned")
            self._writer = True
        guard = _WriteGuard(self._value)
        try:
            yield guard
        except BaseException:
            self._poisoned = True
            raise
        finally:
            with self._cond:
                self._value = guard.value
                self._writer = False
                self._cond.notify_all()


def safe_write(lock: RwLock[T], operation: Callable[[Any], R]) -> R | None:
    """Run operation with write access, or return None if the lock is poisoned."""
    with ExitStack() as stack:
        try:
            guard = stack.enter_context(lock.write())
        except PoisonError:
            logger.error("Failed to acquire write lock.")
            return None
        logger.info("Successfully acquired write lock.")
        return operation(guard)


def safe_read(lock: RwLock[T], operation: Callable[[Any], R]) -> R | None:
    """Run operation with read access, or return None if the lock is poisoned."""
    with ExitStack() as stack:
        try:
            guard = stack.enter_context(lock.read())
        except PoisonError:
            logger.error("Failed to acquire read lock.")
            return None
        logger.info("Successfully acquired read lock.")
        return operation(guard)