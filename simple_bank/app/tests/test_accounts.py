import pytest
from sqlmodel import Session

from ..core.errors import ERR_NO_ROWS, AccountNotFoundError, LedgerValidationError, NotFoundError
from ..models import SUPPORTED_CURRENCIES, AccountUpdate
from ..services import LedgerService
from .factories import random_money


def test_create_account(create_random_account) -> None:
    create_random_account()


def test_create_account_assigns_increasing_ids(create_random_account) -> None:
    first = create_random_account()
    second = create_random_account()
    assert second.id > first.id


def test_get_account(service, create_random_account) -> None:
    account1 = create_random_account()
    account2 = service.get_account(account1.id)

    assert account2 == account1


def test_update_account_only_changes_balance(service, create_random_account) -> None:
    account1 = create_random_account()
    new_balance = account1.balance + random_money() + 1

    account2 = service.update_account(account1.id, AccountUpdate(balance=new_balance))

    assert account2.id == account1.id
    assert account2.owner == account1.owner
    assert account2.balance == new_balance
    assert account2.currency == account1.currency
    assert account2.created_at == account1.created_at
    assert service.get_account(account1.id) == account2


def test_update_missing_account(service) -> None:
    with pytest.raises(AccountNotFoundError):
        service.update_account(999_999, AccountUpdate(balance=10))


def test_delete_account(service, create_random_account) -> None:
    account1 = create_random_account()
    service.delete_account(account1.id)

    with pytest.raises(NotFoundError) as excinfo:
        service.get_account(account1.id)
    assert str(excinfo.value) == ERR_NO_ROWS
    assert excinfo.value.resource_id == account1.id


def test_delete_missing_account(service) -> None:
    with pytest.raises(AccountNotFoundError):
        service.delete_account(999_999)


def test_list_accounts(service, create_random_account) -> None:
    for _ in range(10):
        create_random_account()

    accounts = service.list_accounts(limit=5, offset=5)

    assert len(accounts) == 5
    for account in accounts:
        assert account.id > 0
        assert account.owner
    assert [a.id for a in accounts] == sorted(a.id for a in accounts)


@pytest.mark.parametrize("limit, offset", [(0, 0), (5, -1)])
def test_list_accounts_rejects_bad_page(service, limit, offset) -> None:
    with pytest.raises(LedgerValidationError):
        service.list_accounts(limit=limit, offset=offset)


def test_list_accounts_uses_default_page_size(engine, create_random_account) -> None:
    for _ in range(4):
        create_random_account()
    service = LedgerService(lambda: Session(engine), default_page_size=3)

    assert len(service.list_accounts()) == 3
    assert len(service.list_accounts(offset=3)) == 1


@pytest.mark.parametrize("currency", SUPPORTED_CURRENCIES)
def test_every_supported_currency_is_accepted(create_random_account, currency) -> None:
    assert create_random_account(currency=currency).currency == currency


def test_supported_currencies() -> None:
    assert set(SUPPORTED_CURRENCIES) == {"USD", "EUR", "CAD"}
