# rtosal

RTOS-style primitives for Python threads. Every blocking call takes a timeout in
milliseconds, with two special values defined in `rtosal.primitives`:

- `WAIT_NO` (`0`) polls once and does not wait.
- `WAIT_FOREVER` (`0xFFFFFFFF`) waits until the object becomes available.

Timeouts must be integers between `0` and `0xFFFFFFFF`.

## Installation

```
pip install rtosal
```

## Errors

- `WaitTimeout` is raised when a wait runs out before the object became available.
- `OsalError` (the base class of `WaitTimeout`) is raised when an object is used after
  `delete()`, when a thread is deleted twice, or when an unlocked mutex is released.
- `ValueError` / `TypeError` are raised for out-of-range or non-integer arguments, and
  `ValueError` for a message of the wrong size.

## Primitives

`rtosal.primitives` provides:

- `Thread(name, entry, parameter=None, stack_size=0, priority=0, tick=0)` creates a
  thread that stays parked until `start()` is called, then runs `entry(parameter)`.
  Names are cut to 31 characters. `stack_size`, `priority` and `tick` are stored as
  attributes only; the host scheduler decides how threads run.
  - `start()` lets the thread run.
  - `delete()` cancels the thread and waits for it to finish. A thread that was never
    started never runs its entry; a running thread stops at its next `sleep_ms()`.
  - `join(timeout=None)` waits up to `timeout` ms (forever if `None`) and returns `True`
    if the thread has finished.
  - `alive` and `cancelled` report the thread's state.
- `Semaphore(name, value=0)` is a counting semaphore with `take(timeout=WAIT_FOREVER)`,
  `release()` and `delete()`.
- `Mutex(name)` is a non-recursive lock with `take(timeout=WAIT_FOREVER)`, `release()`,
  `delete()` and a `locked` property. It can be used as a context manager.
- `sleep_ms(ms)` sleeps for `ms` milliseconds. Inside a deleted thread it is where the
  thread stops.
- `printf(fmt, *args)` writes `fmt % args` to standard output, flushes, and returns the
  number of characters written.

```python
from rtosal.primitives import WAIT_FOREVER, WAIT_NO, Semaphore, Thread, WaitTimeout, sleep_ms

sem = Semaphore("sem", 0)

def producer(_):
    for _ in range(3):
        sem.release()
        sleep_ms(50)

t = Thread("producer", producer, None, 1024, 10, 10)
t.start()
for _ in range(3):
    sem.take(WAIT_FOREVER)
try:
    sem.take(WAIT_NO)
except WaitTimeout:
    print("nothing left")
```

## Queues and mailboxes

`rtosal.queues` provides two bounded FIFOs. Their capacity must be at least 1, and
`len()` gives the number of items waiting.

- `MessageQueue(name, msg_size, max_msgs)` carries byte messages of exactly `msg_size`
  bytes. `send(msg, timeout=WAIT_FOREVER)` copies `bytes(msg)` in, waiting for room;
  `recv(timeout=WAIT_FOREVER)` returns the oldest message; `delete()` destroys it.
- `Mailbox(name, size)` carries unsigned 32-bit values with the same `send(value,
  timeout)`, `recv(timeout)` and `delete()` methods.

```python
from rtosal.queues import Mailbox

mb = Mailbox("mb", 1)
mb.send(0xFF010203)
print(f"{mb.recv():08X}")
```

## Demo

`rtosal.demo` runs each primitive in turn — threads, semaphore, mutex, message queue and
mailbox — each for about three seconds, printing what the threads do. Run it with:

```
rtosal-demo
```

The pieces can also be called from Python: `rtosal.demo.thread_demo()`, `sem_demo()`,
`mutex_demo()`, `mq_demo()`, `mb_demo()`, or `main()` for all of them.

## What it does not do

Threads are ordinary Python threads: there is no priority scheduling, time slicing or
stack-size limit, and a deleted thread can only be stopped inside `sleep_ms()`.