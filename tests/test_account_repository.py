"""
Tests for AccountRepository against an in-memory SQLite database.

These tests verify:
  - save assigns an id and timestamps, and rewrites updated_at on every save
  - balances come back as two-place decimals
  - lookups by id, account number, holder-name fragment and currency
  - exists/delete semantics
  - a duplicate account number surfaces as DuplicateAccountNumberError
"""

import asyncio
from decimal import Decimal

import pytest

from banklite.exceptions import DuplicateAccountNumberError, PersistenceError
from banklite.models.account import Account, Currency


def new_account(number, name="John Doe", balance="1000.00", currency=Currency.USD):
    return Account(
        account_holder_name=name,
        account_number=number,
        balance=Decimal(balance),
        currency=currency,
    )


class TestSave:

    async def test_save_assigns_id_and_timestamps(self, repository):
        account = await repository.save(new_account("ACC1"))

        assert account.id is not None
        assert account.created_at is not None
        assert account.updated_at is not None

    async def test_ids_increase(self, repository):
        first = await repository.save(new_account("ACC1"))
        second = await repository.save(new_account("ACC2"))
        assert second.id > first.id

    async def test_resave_keeps_created_at_and_moves_updated_at(self, repository):
        account = await repository.save(new_account("ACC1"))
        created_at = account.created_at
        first_updated_at = account.updated_at

        await asyncio.sleep(0.01)
        account.account_holder_name = "Jane Doe"
        await repository.save(account)

        assert account.created_at == created_at
        assert account.updated_at > first_updated_at

    async def test_duplicate_account_number(self, repository):
        await repository.save(new_account("ACC1"))

        with pytest.raises(DuplicateAccountNumberError) as exc_info:
            await repository.save(new_account("ACC1", name="Someone Else"))

        assert exc_info.value.account_number == "ACC1"
        assert isinstance(exc_info.value, PersistenceError)


class TestLookups:

    async def test_find_by_id(self, repository, db_session):
        saved = await repository.save(new_account("ACC1", balance="1000.5"))
        await db_session.commit()
        db_session.expunge_all()

        found = await repository.find_by_id(saved.id)

        assert found is not None
        assert found is not saved
        assert found.account_number == "ACC1"
        assert found.balance == Decimal("1000.50")
        assert found.currency == Currency.USD

    async def test_find_by_id_missing(self, repository):
        assert await repository.find_by_id(99999) is None

    async def test_find_all(self, repository):
        await repository.save(new_account("ACC1"))
        await repository.save(new_account("ACC2"))

        accounts = await repository.find_all()

        assert [a.account_number for a in accounts] == ["ACC1", "ACC2"]

    async def test_find_all_empty(self, repository):
        assert await repository.find_all() == []

    async def test_find_by_account_number(self, repository):
        await repository.save(new_account("ACC1"))
        saved = await repository.save(new_account("ACC2", name="Bob Johnson"))

        found = await repository.find_by_account_number("ACC2")

        assert found.id == saved.id
        assert await repository.find_by_account_number("ACC3") is None

    async def test_find_by_holder_name_containing(self, repository):
        await repository.save(new_account("ACC1", name="Alice Smith"))
        await repository.save(new_account("ACC2", name="Bob Johnson"))
        await repository.save(new_account("ACC3", name="Will Smithers"))

        found = await repository.find_by_account_holder_name_containing("Smith")

        assert [a.account_number for a in found] == ["ACC1", "ACC3"]

    async def test_holder_name_search_is_case_sensitive(self, repository):
        await repository.save(new_account("ACC1", name="Alice Smith"))

        assert await repository.find_by_account_holder_name_containing("smith") == []
        found = await repository.find_by_account_holder_name_containing("Smith")
        assert [a.account_number for a in found] == ["ACC1"]

    async def test_holder_name_fragment_wildcards_are_literal(self, repository):
        await repository.save(new_account("ACC1", name="Alice Smith"))
        await repository.save(new_account("ACC2", name="100% Owner"))

        found = await repository.find_by_account_holder_name_containing("%")

        assert [a.account_number for a in found] == ["ACC2"]

    async def test_find_by_currency(self, repository):
        await repository.save(new_account("ACC1", currency=Currency.USD))
        await repository.save(new_account("ACC2", currency=Currency.EUR))
        await repository.save(new_account("ACC3", currency=Currency.EUR))

        found = await repository.find_by_currency(Currency.EUR)

        assert [a.account_number for a in found] == ["ACC2", "ACC3"]
        assert await repository.find_by_currency(Currency.GBP) == []


class TestExistsAndDelete:

    async def test_exists_by_id(self, repository):
        saved = await repository.save(new_account("ACC1"))

        assert await repository.exists_by_id(saved.id) is True
        assert await repository.exists_by_id(saved.id + 1) is False

    async def test_delete_by_id(self, repository):
        saved = await repository.save(new_account("ACC1"))

        await repository.delete_by_id(saved.id)

        assert await repository.exists_by_id(saved.id) is False
        assert await repository.find_all() == []

    async def test_delete_missing_is_noop(self, repository):
        await repository.save(new_account("ACC1"))

        await repository.delete_by_id(424242)

        assert len(await repository.find_all()) == 1
