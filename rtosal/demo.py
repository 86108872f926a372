"""Demonstrations of threads, semaphores, mutexes, queues and mailboxes."""

from __future__ import annotations

from typing import Optional, Sequence

from rtosal.primitives import (
    WAIT_FOREVER,
    Mutex,
    Semaphore,
    Thread,
    printf,
    sleep_ms,
)
from rtosal.queues import Mailbox, MessageQueue

_RUN_MS = 3000
_MSG_SIZE = 32


def _run_pair(first, second, banner: str) -> int:
    t1 = Thread("t1", first, None, 1024, 10, 10)
    t2 = Thread("t2", second, None, 1024, 10, 10)
    printf("===================== %s Demo =====================\n", banner)
    t1.start()
    t2.start()
    sleep_ms(_RUN_MS)
    t1.delete()
    t2.delete()
    return 0


def thread_demo() -> int:
    """Two threads logging at different rates."""

    def logger(number: int, period_ms: int):
        def entry(_):
            for i in range(10):
                printf("Thread %d: log %d\n", number, i)
                sleep_ms(period_ms)
            printf("Thread %d exit\n", number)

        return entry

    return _run_pair(logger(1, 200), logger(2, 100), "Thread")


def sem_demo() -> int:
    """One thread signals a semaphore, the other waits on it."""
    sem = Semaphore("sem", 0)

    def producer(_):
        for i in range(5):
            printf("Thread 3: log %d\n", i)
            sem.release()
            sleep_ms(200)
        printf("Thread 3 exit\n")

    def consumer(_):
        for i in range(5):
            sem.take(WAIT_FOREVER)
            printf("Thread 4: log %d\n", i)
        printf("Thread 4 exit\n")

    return _run_pair(producer, consumer, "Sem")


def mutex_demo() -> int:
    """One thread waits for a mutex held by another."""
    mutex = Mutex("mutex")

    def waiter(_):
        sleep_ms(100)
        printf("Thread 5 waiting for mutex\n")
        mutex.take(WAIT_FOREVER)
        printf("Thread 5 acquired mutex\n")

    def holder(_):
        mutex.take(WAIT_FOREVER)
        sleep_ms(2000)
        printf("Thread 6 release mutex\n")
        mutex.release()

    return _run_pair(waiter, holder, "Mutex")


def mq_demo() -> int:
    """One thread waits for a message that the other sends later."""
    mq = MessageQueue("mq", _MSG_SIZE, 1)

    def receiver(_):
        sleep_ms(100)
        printf("Thread 7 waiting for message\n")
        raw = mq.recv(WAIT_FOREVER)
        printf("Thread 7 receive message: %s\n", raw.rstrip(b"\0").decode())

    def sender(_):
        msg = b"Hello from Thread 6".ljust(_MSG_SIZE, b"\0")
        sleep_ms(2000)
        printf("Thread 8 send message\n")
        mq.send(msg, WAIT_FOREVER)

    return _run_pair(receiver, sender, "Mq")


def mb_demo() -> int:
    """One thread waits for a mailbox value that the other posts later."""
    mb = Mailbox("mb", 1)

    def receiver(_):
        sleep_ms(100)
        printf("Thread 9 waiting for mb\n")
        value = mb.recv(WAIT_FOREVER)
        printf("Thread 9 receive mb: %08X\n", value)

    def sender(_):
        value = 0xFF010203
        sleep_ms(2000)
        printf("Thread 10 send mb\n")
        mb.send(value, WAIT_FOREVER)

    return _run_pair(receiver, sender, "Mb")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run every demonstration in turn."""
    printf("OSAL Demostrate!\n")
    thread_demo()
    sem_demo()
    mutex_demo()
    mq_demo()
    mb_demo()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())