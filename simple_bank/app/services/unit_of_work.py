from __future__ import annotations

import enum
import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..core.db import READ_ONLY_OPTION
from ..core.errors import TransactionError
from .repository import AccountRepository, EntryRepository, TransferRepository


logger = logging.getLogger(__name__)


class UnitOfWorkState(str, enum.Enum):
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class UnitOfWork:
    """One database transaction with the three stores bound to it.

    A ``read_only`` unit of work asks the connection for a plain deferred
    transaction, so on SQLite it does not wait for the write lock.

    Leaving the ``with`` block without calling :meth:`commit` rolls back, as
    does leaving it with an exception. Once committed or rolled back the unit
    of work accepts no further transitions.
    """

    def __init__(
        self, session_factory: Callable[[], Session], read_only: bool = False
    ) -> None:
        self._session_factory = session_factory
        self.read_only = read_only
        self.session: Optional[Session] = None
        self.state: Optional[UnitOfWorkState] = None

    def __enter__(self) -> "UnitOfWork":
        if self.state is not None:
            raise TransactionError(f"Unit of work already {self.state.value}")
        self.session = self._session_factory()
        if self.read_only:
            # Start the transaction now so the option is seen by the begin hook.
            self.session.connection(execution_options={READ_ONLY_OPTION: True})
        self.accounts = AccountRepository(self.session)
        self.entries = EntryRepository(self.session)
        self.transfers = TransferRepository(self.session)
        self.state = UnitOfWorkState.ACTIVE
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self.state is UnitOfWorkState.ACTIVE:
                self.rollback()
        finally:
            if self.session is not None:
                self.session.close()

    def _require_active(self) -> Session:
        if self.state is not UnitOfWorkState.ACTIVE or self.session is None:
            state = self.state.value if self.state else "not started"
            raise TransactionError(f"Unit of work is {state}")
        return self.session

    def commit(self) -> None:
        session = self._require_active()
        try:
            session.commit()
        except SQLAlchemyError as exc:
            self.state = UnitOfWorkState.ROLLED_BACK
            try:
                session.rollback()
            except SQLAlchemyError:
                logger.exception("uow.rollback_after_commit_failed")
            raise TransactionError("Failed to commit unit of work", cause=exc) from exc
        self.state = UnitOfWorkState.COMMITTED

    def rollback(self) -> None:
        session = self._require_active()
        self.state = UnitOfWorkState.ROLLED_BACK
        try:
            session.rollback()
        except SQLAlchemyError as exc:
            raise TransactionError("Failed to roll back unit of work", cause=exc) from exc
