from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..models import db as _db_models  # noqa: F401 - ensure models register with metadata
from .config import get_settings

# Execution option marking a connection whose transaction only reads.
READ_ONLY_OPTION = "simple_bank_read_only"


def _use_immediate_transactions(engine: Engine) -> None:
    """Make every SQLite transaction start with ``BEGIN IMMEDIATE``.

    A deferred transaction that reads before writing fails with SQLITE_BUSY
    when it upgrades its lock. With the write lock taken at BEGIN, concurrent
    writers wait up to the busy timeout instead. Connections carrying
    :data:`READ_ONLY_OPTION` get a deferred BEGIN and never take that lock.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn) -> None:
        if conn.get_execution_options().get(READ_ONLY_OPTION):
            conn.exec_driver_sql("BEGIN")
        else:
            conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine_for_url(
    database_url: str, busy_timeout: Optional[float] = None
) -> Engine:
    connect_args: dict[str, Any] = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        if busy_timeout is None:
            busy_timeout = get_settings().sqlite_busy_timeout
        connect_args = {"check_same_thread": False, "timeout": busy_timeout}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    if is_sqlite:
        _use_immediate_transactions(engine)
    return engine


settings = get_settings()
engine = create_engine_for_url(settings.database_url)


def init_db() -> None:
    SQLModel.metadata.create_all(engine)


def get_engine() -> Engine:
    return engine


def new_session() -> Session:
    return Session(engine)


def set_engine(new_engine: Engine) -> None:
    global engine
    engine = new_engine
