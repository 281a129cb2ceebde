"""
Unit tests for RWLock.

Tests shared/exclusive access and writer preference.
"""

import threading
import time

import pytest

from demoapp.infrastructure.sync import RWLock


class TestRWLock:
    """Unit tests for RWLock."""

    # ================================================================
    # Shared access tests
    # ================================================================

    def test_multiple_readers(self):
        """Test readers share the lock."""
        lock = RWLock()

        lock.acquire_read()
        lock.acquire_read()

        assert lock.readers == 2
        assert lock.write_locked is False

        lock.release_read()
        lock.release_read()
        assert lock.readers == 0

    def test_read_context_manager(self):
        """Test read() releases on exit."""
        lock = RWLock()

        with lock.read():
            assert lock.readers == 1

        assert lock.readers == 0

    # ================================================================
    # Exclusive access tests
    # ================================================================

    def test_write_context_manager(self):
        """Test write() holds the lock exclusively."""
        lock = RWLock()

        with lock.write():
            assert lock.write_locked is True

        assert lock.write_locked is False

    def test_writer_waits_for_readers(self):
        """Test a writer blocks until readers are gone."""
        lock = RWLock()
        acquired = threading.Event()

        def writer():
            with lock.write():
                acquired.set()

        lock.acquire_read()
        thread = threading.Thread(target=writer)
        thread.start()

        assert acquired.wait(0.1) is False

        lock.release_read()
        assert acquired.wait(2.0) is True
        thread.join(2.0)

    def test_reader_waits_for_writer(self):
        """Test readers block while a writer holds the lock."""
        lock = RWLock()
        acquired = threading.Event()

        def reader():
            with lock.read():
                acquired.set()

        lock.acquire_write()
        thread = threading.Thread(target=reader)
        thread.start()

        assert acquired.wait(0.1) is False

        lock.release_write()
        assert acquired.wait(2.0) is True
        thread.join(2.0)

    def test_waiting_writer_blocks_new_readers(self):
        """Test writer preference: new readers queue behind a waiting writer."""
        lock = RWLock()
        order = []

        def writer():
            with lock.write():
                order.append("writer")

        def reader():
            with lock.read():
                order.append("reader")

        lock.acquire_read()
        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        time.sleep(0.05)

        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        time.sleep(0.05)

        assert order == []

        lock.release_read()
        writer_thread.join(2.0)
        reader_thread.join(2.0)

        assert order == ["writer", "reader"]

    # ================================================================
    # Misuse tests
    # ================================================================

    def test_release_read_without_reader(self):
        """Test releasing an unheld read lock fails."""
        with pytest.raises(RuntimeError):
            RWLock().release_read()

    def test_release_write_without_writer(self):
        """Test releasing an unheld write lock fails."""
        with pytest.raises(RuntimeError):
            RWLock().release_write()
