from datetime import datetime
from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field

Currency = Literal["USD", "EUR", "CAD"]
SUPPORTED_CURRENCIES: tuple[str, ...] = get_args(Currency)

class AccountCreate(BaseModel):
    owner: str = Field(..., min_length=1, description="Name of the account holder")
    balance: int = Field(default=0, ge=0, description="Opening balance in minor units (e.g. cents)")
    currency: Currency

class AccountUpdate(BaseModel):
    balance: int = Field(..., ge=0, description="New balance in minor units, overwrites the current one")

class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner: str
    balance: int
    currency: str
    created_at: datetime

class EntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    account_id: int
    amount: int = Field(..., description="Negative for a debit, positive for a credit")
    created_at: datetime

class TransferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    from_account_id: int
    to_account_id: int
    amount: int
    created_at: datetime

class TransferRequest(BaseModel):
    from_account_id: int
    to_account_id: int
    amount: int = Field(..., ge=1, description="Amount in minor units (must be >= 1)")

class TransferFilters(BaseModel):
    from_account_id: Optional[int] = None
    to_account_id: Optional[int] = None

class TransferResult(BaseModel):
    """Everything one transfer wrote, as seen inside its unit of work."""

    transfer: TransferResponse
    from_entry: EntryResponse
    to_entry: EntryResponse
    from_account: AccountResponse
    to_account: AccountResponse
