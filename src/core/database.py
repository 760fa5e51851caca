"""Database connection and session management.

This module handles the SQLite database connection using SQLAlchemy. A
``Store`` is created once at process start and passed explicitly to whoever
needs a session; there is no module-level engine.

``Store.session_scope()`` is the production path: the console opens one
short-lived session per menu action. ``Store.connection()`` hands out a
single process-long session for callers that want one session for their
whole lifetime, such as one-off scripts.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from config import DATABASE_URL, SQL_ECHO
from core.exceptions import DatabaseConnectionError, SchemaError
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401

logger = logging.getLogger(__name__)


class Store:
    """Owns the engine, the session factory and the relational schema."""

    def __init__(self, database_url: str = DATABASE_URL, echo: bool = SQL_ECHO):
        """Initialize Store.

        Args:
            database_url: SQLAlchemy database URL.
            echo: Whether to log every emitted SQL statement.
        """
        self.database_url = database_url
        self.engine = create_engine(
            database_url, echo=echo, connect_args={"check_same_thread": False}
        )
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )
        self._session: Optional[Session] = None

    def _ping(self, session: Session) -> None:
        try:
            session.execute(text("SELECT 1"))
        except OperationalError as e:
            session.close()
            logger.error("Database unreachable at %s: %s", self.database_url, e)
            raise DatabaseConnectionError(
                f"Cannot connect to database '{self.database_url}'"
            ) from e

    def connection(self) -> Session:
        """Return the long-lived session, opening a new one if needed.

        Returns:
            A usable SQLAlchemy Session.

        Raises:
            DatabaseConnectionError: If the backend cannot be reached.
        """
        if self._session is None:
            session = self.SessionLocal()
            self._ping(session)
            self._session = session
            logger.debug("Opened session on %s", self.database_url)
        return self._session

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a fresh session for one logical operation.

        The session is always closed on exit; uncommitted work is discarded.

        Raises:
            DatabaseConnectionError: If the backend cannot be reached.
        """
        db = self.SessionLocal()
        self._ping(db)
        try:
            yield db
        finally:
            db.close()

    def initialize_schema(self) -> None:
        """Create all tables that do not exist yet. Safe to call repeatedly.

        Raises:
            DatabaseConnectionError: If the backend cannot be reached.
            SchemaError: If a CREATE TABLE statement fails.
        """
        try:
            Base.metadata.create_all(bind=self.engine, checkfirst=True)
        except OperationalError as e:
            if "unable to open" in str(e).lower():
                raise DatabaseConnectionError(
                    f"Cannot connect to database '{self.database_url}'"
                ) from e
            logger.error("Schema creation failed: %s", e)
            raise SchemaError(f"Schema creation failed: {e}") from e
        except SQLAlchemyError as e:
            logger.error("Schema creation failed: %s", e)
            raise SchemaError(f"Schema creation failed: {e}") from e
        logger.info("Schema ready on %s", self.database_url)

    def close(self) -> None:
        """Close the long-lived session and release pooled connections."""
        if self._session is not None:
            self._session.close()
            self._session = None
        self.engine.dispose()
