"""Tests for the shared/exclusive lock."""
import threading
import time

import pytest

from bookstore.locking import create_locks


def test_readers_share_the_lock():
    """Test that two readers can hold the lock at the same time."""
    read_lock, _ = create_locks()
    both_inside = threading.Barrier(2, timeout=5)
    errors = []

    def reader():
        with read_lock:
            try:
                both_inside.wait()
            except threading.BrokenBarrierError as e:
                errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []


def test_writer_excludes_readers():
    read_lock, write_lock = create_locks()
    events = []

    write_lock.acquire()
    reader = threading.Thread(target=lambda: (read_lock.acquire(), events.append("read"), read_lock.release()))
    reader.start()
    time.sleep(0.05)
    events.append("write done")
    write_lock.release()
    reader.join()

    assert events == ["write done", "read"]


def test_waiting_writer_blocks_new_readers():
    """Test that a queued writer gets in before readers that arrive later."""
    read_lock, write_lock = create_locks()
    events = []

    read_lock.acquire()
    writer = threading.Thread(target=lambda: (write_lock.acquire(), events.append("write"), write_lock.release()))
    writer.start()
    time.sleep(0.05)
    late_reader = threading.Thread(target=lambda: (read_lock.acquire(), events.append("read"), read_lock.release()))
    late_reader.start()
    time.sleep(0.05)
    read_lock.release()
    writer.join()
    late_reader.join()

    assert events == ["write", "read"]


def test_writes_are_serialized():
    _, write_lock = create_locks()
    counter = {"n": 0}

    def bump():
        for _ in range(1000):
            with write_lock:
                value = counter["n"]
                counter["n"] = value + 1

    threads = [threading.Thread(target=bump) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counter["n"] == 4000


def test_release_unheld_lock():
    read_lock, write_lock = create_locks()

    with pytest.raises(RuntimeError):
        read_lock.release()
    with pytest.raises(RuntimeError):
        write_lock.release()
