"""Threads, counting semaphores and mutexes with RTOS-style timeouts.

Timeouts are given in milliseconds.  ``WAIT_NO`` polls once and
``WAIT_FOREVER`` blocks until the object becomes available.  A wait that
runs out raises :class:`WaitTimeout`.  Using an object after ``delete()``
raises :class:`OsalError`.
"""

from __future__ import annotations

import sys
import threading
import time
from typing import Any, Callable, Optional

WAIT_FOREVER = 0xFFFFFFFF
WAIT_NO = 0

_NAME_MAX = 31
_U32_MAX = 0xFFFFFFFF

_local = threading.local()


class OsalError(Exception):
    """An operation on an OS-abstraction object failed."""


class WaitTimeout(OsalError):
    """A wait ended before the object became available."""


class _ThreadCancelled(BaseException):
    """Unwinds a deleted thread out of a cancellation point."""


def _check_u32(value: int, what: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{what} must be an integer")
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{what} must be between 0 and {_U32_MAX:#x}")
    return value


def _truncate_name(name: Optional[str]) -> str:
    return (name or "")[:_NAME_MAX]


class Thread:
    """A thread that is created parked and runs its entry once started.

    ``stack_size``, ``priority`` and ``tick`` are kept for reference; the
    host scheduler decides how threads are run.
    """

    def __init__(
        self,
        name: Optional[str],
        entry: Optional[Callable[[Any], Any]],
        parameter: Any = None,
        stack_size: int = 0,
        priority: int = 0,
        tick: int = 0,
    ) -> None:
        self.name = _truncate_name(name)
        self.stack_size = stack_size
        self.priority = priority
        self.tick = tick
        self._entry = entry
        self._parameter = parameter
        self._gate = threading.Event()
        self._cancel = threading.Event()
        self._deleted = False
        self._thread = threading.Thread(
            target=self._run, name=self.name or None, daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        self._gate.wait()
        if self._cancel.is_set() or self._entry is None:
            return
        _local.cancel = self._cancel
        try:
            self._entry(self._parameter)
        except _ThreadCancelled:
            pass

    @property
    def cancelled(self) -> bool:
        """True once the thread has been deleted."""
        return self._cancel.is_set()

    @property
    def alive(self) -> bool:
        """True while the underlying thread has not finished."""
        return self._thread.is_alive()

    def start(self) -> None:
        """Let the thread run its entry function."""
        if self._deleted:
            raise OsalError(f"thread {self.name!r} has been deleted")
        self._gate.set()

    def delete(self) -> None:
        """Cancel the thread and wait for it to finish.

        A thread that was never started does not run its entry at all.
        A running thread is stopped at its next :func:`sleep_ms`; other
        code is allowed to run to completion.
        """
        if self._deleted:
            raise OsalError(f"thread {self.name!r} has already been deleted")
        self._deleted = True
        self._cancel.set()
        self._gate.set()
        if threading.current_thread() is not self._thread:
            self._thread.join()

    def join(self, timeout: Optional[int] = None) -> bool:
        """Wait up to ``timeout`` ms (forever if None); return True if finished."""
        if timeout is None or timeout == WAIT_FOREVER:
            self._thread.join()
        else:
            _check_u32(timeout, "timeout")
            self._thread.join(timeout / 1000)
        return not self._thread.is_alive()


class Semaphore:
    """A counting semaphore."""

    def __init__(self, name: Optional[str], value: int = 0) -> None:
        self.name = _truncate_name(name)
        self._sem = threading.Semaphore(_check_u32(value, "value"))
        self._deleted = False

    def _ensure_alive(self) -> None:
        if self._deleted:
            raise OsalError(f"semaphore {self.name!r} has been deleted")

    def take(self, timeout: int = WAIT_FOREVER) -> None:
        """Decrement the count, waiting up to ``timeout`` ms."""
        self._ensure_alive()
        _check_u32(timeout, "timeout")
        if timeout == WAIT_NO:
            acquired = self._sem.acquire(blocking=False)
        elif timeout == WAIT_FOREVER:
            acquired = self._sem.acquire()
        else:
            acquired = self._sem.acquire(timeout=timeout / 1000)
        if not acquired:
            raise WaitTimeout(f"semaphore {self.name!r} not available")

    def release(self) -> None:
        """Increment the count, waking one waiter."""
        self._ensure_alive()
        self._sem.release()

    def delete(self) -> None:
        """Destroy the semaphore."""
        self._ensure_alive()
        self._deleted = True


class Mutex:
    """A non-recursive mutual-exclusion lock."""

    def __init__(self, name: Optional[str]) -> None:
        self.name = _truncate_name(name)
        self._lock = threading.Lock()
        self._deleted = False

    def _ensure_alive(self) -> None:
        if self._deleted:
            raise OsalError(f"mutex {self.name!r} has been deleted")

    @property
    def locked(self) -> bool:
        """True while some thread holds the mutex."""
        return self._lock.locked()

    def take(self, timeout: int = WAIT_FOREVER) -> None:
        """Lock the mutex, waiting up to ``timeout`` ms."""
        self._ensure_alive()
        _check_u32(timeout, "timeout")
        if timeout == WAIT_FOREVER:
            acquired = self._lock.acquire()
        elif timeout == WAIT_NO:
            acquired = self._lock.acquire(blocking=False)
        else:
            acquired = self._lock.acquire(timeout=timeout / 1000)
        if not acquired:
            raise WaitTimeout(f"mutex {self.name!r} not available")

    def release(self) -> None:
        """Unlock the mutex."""
        self._ensure_alive()
        try:
            self._lock.release()
        except RuntimeError as exc:
            raise OsalError(f"mutex {self.name!r} is not locked") from exc

    def delete(self) -> None:
        """Destroy the mutex."""
        self._ensure_alive()
        self._deleted = True

    def __enter__(self) -> "Mutex":
        self.take(WAIT_FOREVER)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def sleep_ms(ms: int) -> None:
    """Sleep for ``ms`` milliseconds; a deleted thread stops here."""
    _check_u32(ms, "ms")
    cancel = getattr(_local, "cancel", None)
    if cancel is None:
        time.sleep(ms / 1000)
    elif cancel.wait(ms / 1000):
        raise _ThreadCancelled()


def printf(fmt: str, *args: Any) -> int:
    """Write a %-formatted string to standard output; return its length."""
    text = fmt % args
    out = sys.stdout
    out.write(text)
    out.flush()
    return len(text)