"""Engine and session management for the line store."""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from lineomatic.config import get_settings
from lineomatic.models.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and hands out transactional sessions."""

    def __init__(
        self,
        database_url: str | None = None,
        pool_size: int | None = None,
        max_overflow: int | None = None,
    ):
        """
        Build the engine for a SQLite file or a PostgreSQL server.

        Args:
            database_url: Connection URL, settings value when omitted
            pool_size: Pooled connections, settings value when omitted
            max_overflow: Connections allowed beyond the pool, settings value when omitted
        """
        settings = get_settings()
        url = make_url(database_url or settings.get_database_url())
        self.is_sqlite = url.get_backend_name() == "sqlite"

        self.engine = create_engine(
            url,
            pool_size=pool_size if pool_size is not None else settings.db_pool_size,
            max_overflow=max_overflow if max_overflow is not None else settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
            connect_args={"check_same_thread": False} if self.is_sqlite else {},
            echo=settings.sql_echo,
        )
        if self.is_sqlite:
            # Sections reference stations; SQLite only enforces that with the pragma
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False)
        logger.debug("Database engine created for %s", url.render_as_string())

    def create_tables(self) -> None:
        """Create the stations, lines and sections tables if missing."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()

    def ping(self) -> bool:
        """Return True when the database answers a trivial query."""
        try:
            with self.engine.connect() as connection:
                connection.execute(select(1))
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            return False
        return True

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Open a session that commits on success and rolls back on error.

        Usage:
            with db.session() as session:
                LineService(session).add_section(...)
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


_db: Database | None = None


def get_db(database_url: str | None = None) -> Database:
    """
    Get the process-wide database, creating it on first use.

    Args:
        database_url: Connection URL, only honoured by the first call
    """
    global _db
    if _db is None:
        _db = Database(database_url)
    return _db


def reset_db() -> None:
    """Forget the process-wide database so the next get_db() builds a new one."""
    global _db
    if _db is not None:
        _db.dispose()
    _db = None
