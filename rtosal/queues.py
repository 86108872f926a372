"""Bounded message queues of fixed-size messages and 32-bit mailboxes."""

from __future__ import annotations

import threading
from collections import deque
from typing import Optional

from rtosal.primitives import (
    WAIT_FOREVER,
    OsalError,
    Semaphore,
    _check_u32,
    _truncate_name,
)


class _BoundedChannel:
    """FIFO of at most ``capacity`` items guarded by two semaphores."""

    kind = "channel"

    def __init__(self, name: Optional[str], capacity: int) -> None:
        _check_u32(capacity, "capacity")
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.name = _truncate_name(name)
        self.capacity = capacity
        self._items: deque = deque()
        self._lock = threading.Lock()
        self._used = Semaphore(name, 0)
        self._free = Semaphore(name, capacity)
        self._deleted = False

    def _ensure_alive(self) -> None:
        if self._deleted:
            raise OsalError(f"{self.kind} {self.name!r} has been deleted")

    def _put(self, item, timeout: int) -> None:
        self._ensure_alive()
        self._free.take(timeout)
        with self._lock:
            self._items.append(item)
        self._used.release()

    def _get(self, timeout: int):
        self._ensure_alive()
        self._used.take(timeout)
        with self._lock:
            item = self._items.popleft()
        self._free.release()
        return item

    def _destroy(self) -> None:
        self._ensure_alive()
        self._deleted = True
        self._used.delete()
        self._free.delete()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class MessageQueue(_BoundedChannel):
    """A queue of messages that are each exactly ``msg_size`` bytes."""

    kind = "message queue"

    def __init__(self, name: Optional[str], msg_size: int, max_msgs: int) -> None:
        self.msg_size = _check_u32(msg_size, "msg_size")
        super().__init__(name, max_msgs)

    @property
    def max_msgs(self) -> int:
        return self.capacity

    def send(self, msg, timeout: int = WAIT_FOREVER) -> None:
        """Copy ``msg`` into the queue, waiting up to ``timeout`` ms for room."""
        data = bytes(msg)
        if len(data) != self.msg_size:
            raise ValueError(
                f"message is {len(data)} bytes, queue takes {self.msg_size}"
            )
        self._put(data, timeout)

    def recv(self, timeout: int = WAIT_FOREVER) -> bytes:
        """Take the oldest message, waiting up to ``timeout`` ms for one."""
        return self._get(timeout)

    def delete(self) -> None:
        """Destroy the queue."""
        self._destroy()


class Mailbox(_BoundedChannel):
    """A queue of unsigned 32-bit values."""

    kind = "mailbox"

    def __init__(self, name: Optional[str], size: int) -> None:
        super().__init__(name, size)

    @property
    def size(self) -> int:
        return self.capacity

    def send(self, value: int, timeout: int = WAIT_FOREVER) -> None:
        """Post ``value``, waiting up to ``timeout`` ms for room."""
        self._put(_check_u32(value, "value"), timeout)

    def recv(self, timeout: int = WAIT_FOREVER) -> int:
        """Take the oldest value, waiting up to ``timeout`` ms for one."""
        return self._get(timeout)

    def delete(self) -> None:
        """Destroy the mailbox."""
        self._destroy()