from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog
from fastapi import Request
from sqlalchemy import create_engine, event, text, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .models import Base

logger = structlog.get_logger(__name__)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign keys for SQLite."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """
    Owns the engine (the bounded connection pool) and the session factory.

    Created once at startup and shared by every request; sessions are
    short-lived and scoped to a single unit of work.
    """

    def __init__(self, url: str, max_connections: int = 5, echo: bool = False):
        self.url = make_url(url)
        self.engine = self._create_engine(max_connections, echo)
        self.session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def _create_engine(self, max_connections: int, echo: bool) -> Engine:
        if self.url.get_backend_name() != "sqlite":
            return create_engine(self.url, echo=echo, pool_size=max_connections)

        connect_args = {"check_same_thread": False}
        database = self.url.database
        if not database or database == ":memory:":
            # One shared connection so every session sees the same database
            return create_engine(
                self.url, echo=echo, connect_args=connect_args, poolclass=StaticPool
            )

        Path(database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            self.url,
            echo=echo,
            connect_args=connect_args,
            pool_size=max_connections,
            max_overflow=0,
        )

    def create_schema(self) -> None:
        """Create tables if they don't exist and add missing columns."""
        Base.metadata.create_all(self.engine)
        _migrate_schema(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on any exception."""
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


def _migrate_schema(engine: Engine) -> None:
    """Add any missing columns to existing tables."""
    inspector = inspect(engine)

    # Columns added after the first release of the schema
    # Format: (table_name, column_name, column_type_sql)
    migrations = [
        ("categories", "label", "VARCHAR(255)"),
        ("transactions", "title", "VARCHAR(50)"),
    ]

    with engine.connect() as conn:
        for table, column, col_type in migrations:
            if not inspector.has_table(table):
                continue
            existing = [c["name"] for c in inspector.get_columns(table)]
            if column not in existing:
                logger.info("schema_column_added", table=table, column=column)
                conn.execute(text(
                    f"ALTER TABLE {table} ADD COLUMN {column} {col_type}"
                ))
                conn.commit()


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency for database sessions."""
    database: Database = request.app.state.database
    with database.session() as session:
        yield session
