"""
Tests for the lazily-initialized, reference-counted database handle.
"""

import threading

import pytest
from sqlalchemy import text

from jobboard.core.database import DatabaseHandle


class TestDatabaseHandle:

    def test_engine_is_created_lazily(self):
        handle = DatabaseHandle("sqlite://")

        assert handle._engine is None

        with handle.session() as db:
            assert db.execute(text("SELECT 1")).scalar() == 1

        assert handle._engine is not None

    def test_session_releases_reference(self):
        handle = DatabaseHandle("sqlite://")

        with handle.session():
            assert handle.refs == 1
            with handle.session():
                assert handle.refs == 2

        assert handle.refs == 0

    def test_reference_released_on_error(self):
        handle = DatabaseHandle("sqlite://")

        with pytest.raises(RuntimeError):
            with handle.session():
                raise RuntimeError("boom")

        assert handle.refs == 0

    def test_concurrent_first_use_creates_one_engine(self):
        handle = DatabaseHandle("sqlite://")
        start = threading.Barrier(8)
        engines = []

        def worker():
            start.wait()
            handle.acquire()
            engines.append(handle._engine)
            handle.release()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(engines) == 8
        assert len({id(engine) for engine in engines}) == 1
        assert handle.refs == 0

    def test_dispose_waits_for_open_sessions(self):
        handle = DatabaseHandle("sqlite://")

        with handle.session():
            handle.dispose()
            assert handle._engine is not None

        assert handle._engine is None

    def test_dispose_idle_handle(self):
        handle = DatabaseHandle("sqlite://")
        handle.acquire()
        handle.release()

        handle.dispose()

        assert handle._engine is None

    def test_release_without_acquire(self):
        with pytest.raises(RuntimeError):
            DatabaseHandle("sqlite://").release()
