import threading
import time

import pytest

from rtosal.primitives import (
    WAIT_FOREVER,
    WAIT_NO,
    Mutex,
    OsalError,
    Semaphore,
    Thread,
    WaitTimeout,
    printf,
    sleep_ms,
)


def test_wait_constants_drive_semaphore_take():
    assert WAIT_FOREVER == 0xFFFFFFFF
    assert WAIT_NO == 0
    sem = Semaphore("sem", 1)
    began = time.monotonic()
    sem.take(WAIT_FOREVER)
    assert time.monotonic() - began < 1
    with pytest.raises(WaitTimeout):
        sem.take(WAIT_NO)


def test_thread_runs_entry_with_parameter_after_start():
    seen = []
    t = Thread("worker", seen.append, "payload", 1024, 10, 10)
    time.sleep(0.05)
    assert seen == []
    t.start()
    assert t.join(2000) is True
    assert seen == ["payload"]
    t.delete()


def test_thread_never_started_does_not_run():
    seen = []
    t = Thread("idle", seen.append, 1, 1024, 10, 10)
    t.delete()
    assert seen == []
    assert t.alive is False
    assert t.cancelled is True


def test_thread_name_truncated():
    t = Thread("n" * 40, None, None, 0, 0, 0)
    assert len(t.name) == 31
    t.delete()


def test_thread_keeps_attributes():
    t = Thread("attrs", None, None, 2048, 7, 5)
    assert (t.stack_size, t.priority, t.tick) == (2048, 7, 5)
    t.delete()


def test_delete_stops_sleeping_thread():
    progress = []

    def entry(_):
        progress.append("before")
        sleep_ms(10_000)
        progress.append("after")

    t = Thread("sleeper", entry, None, 0, 0, 0)
    t.start()
    time.sleep(0.05)
    assert t.alive is True
    began = time.monotonic()
    t.delete()
    assert time.monotonic() - began < 2
    assert t.alive is False
    assert progress == ["before"]


def test_thread_double_delete_and_start_after_delete():
    t = Thread("once", None, None, 0, 0, 0)
    t.delete()
    with pytest.raises(OsalError):
        t.delete()
    with pytest.raises(OsalError):
        t.start()


def test_semaphore_initial_count():
    sem = Semaphore("sem", 2)
    sem.take(WAIT_NO)
    sem.take(WAIT_NO)
    with pytest.raises(WaitTimeout):
        sem.take(WAIT_NO)


def test_semaphore_timed_take_waits():
    sem = Semaphore("sem", 0)
    began = time.monotonic()
    with pytest.raises(WaitTimeout):
        sem.take(100)
    assert time.monotonic() - began >= 0.09


def test_semaphore_release_wakes_waiter():
    sem = Semaphore("sem", 0)
    done = threading.Event()

    def waiter():
        sem.take(WAIT_FOREVER)
        done.set()

    threading.Thread(target=waiter, daemon=True).start()
    time.sleep(0.05)
    assert not done.is_set()
    sem.release()
    assert done.wait(2)
    with pytest.raises(WaitTimeout):
        sem.take(WAIT_NO)


def test_semaphore_bad_timeout_and_value():
    sem = Semaphore("sem", 0)
    with pytest.raises(ValueError):
        sem.take(-1)
    with pytest.raises(ValueError):
        sem.take(WAIT_FOREVER + 1)
    with pytest.raises(ValueError):
        Semaphore("bad", -1)


def test_semaphore_deleted():
    sem = Semaphore("sem", 1)
    sem.delete()
    with pytest.raises(OsalError):
        sem.take(WAIT_NO)
    with pytest.raises(OsalError):
        sem.release()


def test_mutex_take_release():
    m = Mutex("m")
    m.take(WAIT_FOREVER)
    assert m.locked is True
    with pytest.raises(WaitTimeout):
        m.take(WAIT_NO)
    m.release()
    assert m.locked is False


def test_mutex_timed_take_from_other_thread():
    m = Mutex("m")
    m.take()
    errors = []

    def contender():
        try:
            m.take(50)
        except WaitTimeout as exc:
            errors.append(exc)

    th = threading.Thread(target=contender)
    th.start()
    th.join()
    assert len(errors) == 1
    assert m.locked is True
    m.release()
    assert m.locked is False


def test_mutex_release_unlocked_raises():
    m = Mutex("m")
    with pytest.raises(OsalError):
        m.release()


def test_mutex_context_manager():
    m = Mutex("m")
    with m as held:
        assert held is m
        assert m.locked is True
    assert m.locked is False


def test_mutex_deleted():
    m = Mutex("m")
    m.delete()
    with pytest.raises(OsalError):
        m.take(WAIT_NO)


def test_sleep_ms_sleeps():
    began = time.monotonic()
    sleep_ms(50)
    assert time.monotonic() - began >= 0.045
    with pytest.raises(ValueError):
        sleep_ms(-5)


def test_printf_formats_and_counts(capsys):
    count = printf("Thread %d: log %d\n", 1, 2)
    out = capsys.readouterr().out
    assert out == "Thread 1: log 2\n"
    assert count == len(out)


def test_printf_hex_and_percent(capsys):
    printf("%08X %%\n", 0xFF010203)
    assert capsys.readouterr().out == "FF010203 %\n"