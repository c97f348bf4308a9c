"""Database initialization and session helpers"""

import logging
from contextlib import contextmanager
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from regdesk.models.registration import Registration

logger = logging.getLogger(__name__)

FOREIGN_KEYS_PRAGMA = "PRAGMA foreign_keys = ON"


class StorageInitError(RuntimeError):
    """Raised when the database cannot be opened or its schema applied"""


def _enable_foreign_keys(dbapi_connection, connection_record):
    # Foreign key enforcement is a per-connection setting in SQLite
    cursor = dbapi_connection.cursor()
    cursor.execute(FOREIGN_KEYS_PRAGMA)
    cursor.close()


def init_database(path: str) -> Engine:
    """
    Open (creating if absent) the SQLite database at `path` and apply the schema.

    Runs the foreign key pragma followed by creation of the `registration`
    table when it does not exist yet. Safe to call on every start.

    Args:
        path: Filesystem path of the database file

    Returns:
        Engine bound to the database file

    Raises:
        StorageInitError: If the database cannot be opened or the schema applied
    """
    engine = create_engine(
        f"sqlite:///{Path(path)}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _enable_foreign_keys)

    try:
        with engine.begin() as conn:
            conn.exec_driver_sql(FOREIGN_KEYS_PRAGMA)
            Registration.metadata.create_all(conn, tables=[Registration.__table__])
    except SQLAlchemyError as e:
        engine.dispose()
        raise StorageInitError(f"Failed to initialize database at {path}: {e}") from e

    logger.info(f"Database ready at {path}")
    return engine


@contextmanager
def get_db(request: Request):
    """Get database session bound to the application's engine"""
    with Session(request.app.state.context.engine) as session:
        yield session
