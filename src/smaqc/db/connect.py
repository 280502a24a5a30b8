# smaqc/db/connect.py

import os
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from smaqc.errors import ConfigError
from smaqc.logging import get_logger

logger = get_logger(__file__)


def get_db_uri(file: str | Path | None = None) -> str:
    """Return a database URI string.

    Parameters
    ----------
    file:
        Path to a SQLite database file, or a full SQLAlchemy URI. When
        ``None`` the ``SMAQC_DB_PATH`` environment variable is used.

    Returns
    -------
    str
        URI suitable for :func:`sqlalchemy.create_engine`.
    """

    if file is None:
        file = os.getenv("SMAQC_DB_PATH")
    if file is None or not str(file).strip():
        raise ConfigError("no database given; pass a path or set SMAQC_DB_PATH")

    db_uri = str(file)
    if "://" not in db_uri:
        db_uri = "sqlite:///" + str(Path(db_uri).expanduser())
    logger.debug("setting db_uri to %s", db_uri)
    return db_uri


def sqlite_engine(db_path="sqlite:///:memory:") -> Engine:
    engine = create_engine(
        db_path,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_trace(dbapi_connection, connection_record):
        dbapi_connection.set_trace_callback(lambda x: logger.debug(x))

    return engine


def make_engine(file: str | Path | None = None) -> Engine:
    """Create an engine for ``file`` (path or URI)."""

    db_uri = get_db_uri(file)
    if db_uri.startswith("sqlite"):
        return sqlite_engine(db_uri)
    return create_engine(db_uri, echo=False)
