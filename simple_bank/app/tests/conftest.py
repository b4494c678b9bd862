import pytest
from sqlmodel import Session, SQLModel

from ..core.db import create_engine_for_url
from ..models import AccountCreate, AccountResponse
from ..services import LedgerService
from .factories import random_currency, random_money, random_owner


@pytest.fixture
def engine(tmp_path):
    engine = create_engine_for_url(f"sqlite:///{tmp_path / 'test.db'}", busy_timeout=30)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def service(engine) -> LedgerService:
    return LedgerService(lambda: Session(engine))


@pytest.fixture
def create_random_account(service: LedgerService):
    def _create(**overrides) -> AccountResponse:
        fields = {
            "owner": random_owner(),
            "balance": random_money(),
            "currency": random_currency(),
        }
        fields.update(overrides)
        payload = AccountCreate(**fields)
        account = service.create_account(payload)

        assert account.owner == payload.owner
        assert account.balance == payload.balance
        assert account.currency == payload.currency
        assert account.id > 0
        assert account.created_at is not None
        return account

    return _create
