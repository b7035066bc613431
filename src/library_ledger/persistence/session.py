"""
Snapshot database session management for the Library Ledger.

``SnapshotManager`` wraps one SQLAlchemy engine and session factory. It is
created by whoever owns the ledger (normally the server) and passed to the
snapshot functions; there is no global manager.

- Sessions are short-lived and used through ``session_scope()``
- SQLite connections enforce foreign keys
- ``close()`` disposes the engine on shutdown
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import get_config
from .schema import Base

logger = logging.getLogger(__name__)


class SnapshotManager:
    """
    Manages the snapshot database connection and sessions.

    Provides:
    - Lazy SQLite engine creation (StaticPool, foreign keys on)
    - Session factory with explicit transactions
    - Schema initialization
    """

    def __init__(self, database_url: str | None = None):
        """
        Initialize the snapshot manager.

        Args:
            database_url: SQLAlchemy database URL. If None, uses the
                configured ``snapshot_path``.

        Raises:
            ValueError: If no URL is given and persistence is not configured
        """
        if database_url is None:
            database_url = get_config().get_database_url()
            if database_url is None:
                raise ValueError("Snapshot persistence is not configured (snapshot_path is unset)")

        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = create_engine(
                self.database_url,
                # Single shared connection avoids "database is locked" errors
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=False,
            )

            @event.listens_for(self._engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ARG001
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

            logger.info("Snapshot engine created: %s", self._engine.url)

        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._session_factory

    def create_session(self) -> Session:
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope for snapshot operations.

        ```python
        with manager.session_scope() as session:
            session.add(row)
        # committed on success, rolled back on error
        ```
        """
        session = self.create_session()
        try:
            yield session
            session.commit()
            logger.debug("Snapshot transaction committed successfully")
        except Exception:
            logger.exception("Snapshot database error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def init_database(self, drop_existing: bool = False) -> None:
        """
        Create the snapshot tables.

        Args:
            drop_existing: If True, drop all tables before creating
        """
        if drop_existing:
            logger.warning("Dropping all existing snapshot tables...")
            Base.metadata.drop_all(bind=self.engine)

        Base.metadata.create_all(bind=self.engine)
        logger.info("Snapshot schema ready")

    def close(self) -> None:
        """Dispose the engine. Safe to call more than once."""
        if self._engine:
            self._engine.dispose()
            logger.info("Snapshot engine disposed")
        self._engine = None
        self._session_factory = None
