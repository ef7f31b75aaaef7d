"""Tests for ghost_grid.sync."""

from __future__ import annotations

import threading

import pytest

from conftest import wait_until
from ghost_grid.sync import ReadWriteLock


class TestReadWriteLock:
    def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        inside = threading.Event()

        def second_reader() -> None:
            with lock.read_locked():
                inside.set()

        with lock.read_locked():
            t = threading.Thread(target=second_reader)
            t.start()
            assert inside.wait(1.0)
        t.join(1.0)

    def test_writer_waits_for_reader(self) -> None:
        lock = ReadWriteLock()
        written = threading.Event()

        def writer() -> None:
            with lock.write_locked():
                written.set()

        lock.acquire_read()
        t = threading.Thread(target=writer)
        t.start()
        assert not written.wait(0.1)
        lock.release_read()
        assert written.wait(1.0)
        t.join(1.0)

    def test_waiting_writer_blocks_new_readers(self) -> None:
        lock = ReadWriteLock()
        order = []

        def writer() -> None:
            with lock.write_locked():
                order.append('write')

        def reader() -> None:
            with lock.read_locked():
                order.append('read')

        lock.acquire_read()
        w = threading.Thread(target=writer)
        w.start()
        assert wait_until(lambda: lock._writers_waiting == 1)
        r = threading.Thread(target=reader)
        r.start()
        assert not wait_until(lambda: order, timeout=0.1)
        lock.release_read()
        w.join(1.0)
        r.join(1.0)
        assert order == ['write', 'read']

    def test_writer_excludes_readers(self) -> None:
        lock = ReadWriteLock()
        read = threading.Event()

        def reader() -> None:
            with lock.read_locked():
                read.set()

        with lock.write_locked():
            t = threading.Thread(target=reader)
            t.start()
            assert not read.wait(0.1)
        assert read.wait(1.0)
        t.join(1.0)

    def test_unbalanced_release_raises(self) -> None:
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()
