"""
Database engine lifecycle and session dependency.

The engine is created lazily on first use and shared by every request.
Sessions are handed out through a scoped acquisition so the handle knows how
many requests are still using the engine when the app shuts down.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from jobboard.core.config import settings

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


class DatabaseHandle:
    """
    Lazily-initialized, reference-counted owner of the SQLAlchemy engine.

    acquire()/release() may be called from any threadpool worker; the first
    acquire builds the engine under a lock so concurrent first requests share
    a single engine.
    """

    def __init__(self, url: str):
        self.url = url
        self._lock = threading.Lock()
        self._engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None
        self._refs = 0
        self._dispose_pending = False

    @property
    def refs(self) -> int:
        return self._refs

    @property
    def engine(self) -> Engine:
        with self._lock:
            return self._ensure_engine()

    def _ensure_engine(self) -> Engine:
        if self._engine is None:
            if self.url.startswith("sqlite"):
                self._engine = create_engine(
                    self.url,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_engine(
                    self.url,
                    pool_pre_ping=True,  # Verify connections before using them
                    pool_size=10,
                    max_overflow=20
                )
            self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
            self._dispose_pending = False
            logger.info(f"Database engine created for {self._engine.url.render_as_string(hide_password=True)}")
        return self._engine

    def acquire(self) -> sessionmaker:
        with self._lock:
            self._ensure_engine()
            self._refs += 1
            return self._sessionmaker

    def release(self) -> None:
        with self._lock:
            if self._refs == 0:
                raise RuntimeError("DatabaseHandle.release() called without a matching acquire()")
            self._refs -= 1
            if self._refs == 0 and self._dispose_pending:
                self._close_engine()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Scoped acquisition: one session, released when the block exits."""
        factory = self.acquire()
        db = factory()
        try:
            yield db
        finally:
            db.close()
            self.release()

    def dispose(self) -> None:
        """Close the engine now, or as soon as the last session is released."""
        with self._lock:
            if self._engine is None:
                return
            if self._refs:
                self._dispose_pending = True
                logger.info(f"Deferring engine disposal until {self._refs} session(s) finish")
                return
            self._close_engine()

    def _close_engine(self) -> None:
        self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        self._dispose_pending = False
        logger.info("Database engine disposed")


database = DatabaseHandle(settings.DATABASE_URL)


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    with database.session() as db:
        yield db


def init_db():
    """
    Initialize database.

    Imports the models so they register on Base, then creates any missing
    tables for the four collections.
    """
    from jobboard.models import job, application, blog, image  # noqa: F401
    Base.metadata.create_all(bind=database.engine)
