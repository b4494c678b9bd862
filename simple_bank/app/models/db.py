from __future__ import annotations
from datetime import datetime, UTC
from typing import Optional
from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

# Entry and transfer rows reference accounts.id without a database-level
# constraint: deleting an account leaves its history in place.

class Account(SQLModel, table=True):
    __tablename__ = "accounts"

    id: Optional[int] = Field(default=None, primary_key=True)
    owner: str = Field(index=True)
    balance: int
    currency: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

class Entry(SQLModel, table=True):
    __tablename__ = "entries"

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(index=True)
    # Negative for a debit, positive for a credit.
    amount: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

class Transfer(SQLModel, table=True):
    __tablename__ = "transfers"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transfers_positive_amount"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    from_account_id: int = Field(index=True)
    to_account_id: int = Field(index=True)
    amount: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
