import threading

import pytest

from apigen.lock import PoisonError, RwLock, safe_read, safe_write


def _poison(lock):
    def boom(_guard):
        raise RuntimeError("Poisoned the RwLock explicitly.")

    with pytest.raises(RuntimeError):
        safe_write(lock, boom)


def test_should_write_successfully():
    lock = RwLock(1)

    def operation(guard):
        guard.value = 100
        return 2 * guard.value

    result = safe_write(lock, operation)

    with lock.read() as guard:
        assert result == 2 * guard.value
        assert guard.value == 100


def test_should_fail_to_write_for_poisoned_lock():
    lock = RwLock(1)
    _poison(lock)

    def operation(guard):
        guard.value = 100

    assert safe_write(lock, operation) is None
    assert lock.poisoned is True


def test_should_read_successfully():
    lock = RwLock(1)
    result = safe_read(lock, lambda guard: 2 * guard.value)
    with lock.read() as guard:
        assert result == 2 * guard.value


def test_should_fail_to_read_for_poisoned_lock():
    lock = RwLock(1)
    _poison(lock)
    assert safe_read(lock, lambda guard: 2 * guard.value) is None


def test_poisoned_lock_raises_on_direct_access():
    lock = RwLock(1)
    _poison(lock)
    with pytest.raises(PoisonError):
        with lock.read():
            pass
    with pytest.raises(PoisonError):
        with lock.write():
            pass


def test_writes_before_failure_are_kept():
    lock = RwLock(1)

    def partial(guard):
        guard.value = 5
        raise RuntimeError("fail")

    with pytest.raises(RuntimeError):
        safe_write(lock, partial)
    assert lock._value == 5


def test_concurrent_writers_do_not_lose_updates():
    lock = RwLock(0)

    def increment(guard):
        guard.value = guard.value + 1

    def worker():
        for _ in range(200):
            safe_write(lock, increment)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert safe_read(lock, lambda guard: guard.value) == 8 * 200