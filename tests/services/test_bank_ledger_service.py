"""
Tests for BankLedgerService.

Tests cover:
- Amount validation on create and update
- remaining_amount derived on every write
- Running balances and whole-bank summary
- Partial updates keeping stored values
- Ownership checks (trader -> bank -> entry)
"""

from decimal import Decimal

import pytest

from hisaab_kitaab.errors import NotFoundError, ValidationError
from hisaab_kitaab.models.enums import PaymentMethod
from hisaab_kitaab.services.bank_ledger_service import BankLedgerService
from hisaab_kitaab.services.bank_service import BankService
from hisaab_kitaab.services.trader_service import TraderService
from hisaab_kitaab.schemas.ledger import (
    BankLedgerEntryCreate,
    BankLedgerEntryUpdate,
)
from hisaab_kitaab.schemas.trader import BankCreate, TraderCreate


# --- Helpers ---

def make_bank(repo, trader_name="Ali Traders", bank_name="Meezan"):
    """Create a trader with one bank and return (trader, bank)."""
    trader = TraderService(repo).create_trader(
        TraderCreate(name=trader_name, short_name="AT")
    )
    bank = BankService(repo).create_bank(
        trader.id, BankCreate(name=bank_name, code="mzn")
    )
    repo.commit()
    return trader, bank


def add_entry(service, trader, bank, date, added="0", withdrawn="0"):
    return service.create_entry(trader.id, bank.id, BankLedgerEntryCreate(
        date=date,
        amount_added=Decimal(added),
        amount_withdrawn=Decimal(withdrawn),
    ))


# --- Create Tests ---

class TestCreateEntry:

    def test_create_entry_derives_remaining_amount(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)

        row = service.create_entry(trader.id, bank.id, BankLedgerEntryCreate(
            date="2024-01-01",
            reference_type=PaymentMethod.ONLINE,
            amount_added=Decimal("1000"),
            amount_withdrawn=Decimal("250"),
            reference_person="Bilal",
        ))
        repo.commit()

        assert row.record.id is not None
        assert row.record.remaining_amount == Decimal("750")
        assert row.net_change == Decimal("750")
        assert row.running_balance == Decimal("750")

    def test_both_amounts_zero_rejected(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)

        with pytest.raises(ValidationError, match="greater than zero"):
            add_entry(service, trader, bank, "2024-01-01")

    def test_running_balance_includes_earlier_entries(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)
        add_entry(service, trader, bank, "2024-01-01", added="1000")
        add_entry(service, trader, bank, "2024-01-03", added="500")

        # Back-dated entry lands between the other two
        row = add_entry(service, trader, bank, "2024-01-02", withdrawn="300")

        assert row.running_balance == Decimal("700")

    def test_unknown_bank_rejected(self, repo):
        trader, _ = make_bank(repo)
        service = BankLedgerService(repo)

        with pytest.raises(NotFoundError):
            service.create_entry(trader.id, 999, BankLedgerEntryCreate(
                date="2024-01-01", amount_added=Decimal("1"),
            ))


# --- Ledger Tests ---

class TestGetLedger:

    def test_three_entry_scenario(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)
        add_entry(service, trader, bank, "2024-01-03", added="500")
        add_entry(service, trader, bank, "2024-01-01", added="1000")
        add_entry(service, trader, bank, "2024-01-02", withdrawn="300")
        repo.commit()

        ledger = service.get_ledger(trader.id, bank.id)

        assert [r.record.date for r in ledger.rows] == [
            "2024-01-01", "2024-01-02", "2024-01-03",
        ]
        assert [r.running_balance for r in ledger.rows] == [
            Decimal("1000"), Decimal("700"), Decimal("1200"),
        ]
        assert ledger.summary.total_credit == Decimal("1500")
        assert ledger.summary.total_debit == Decimal("300")
        assert ledger.summary.remaining_balance == Decimal("1200")

    def test_empty_ledger(self, repo):
        trader, bank = make_bank(repo)
        ledger = BankLedgerService(repo).get_ledger(trader.id, bank.id)

        assert ledger.rows == []
        assert ledger.summary.remaining_balance == Decimal("0")

    def test_banks_are_separate_scopes(self, repo):
        trader, bank = make_bank(repo)
        other = BankService(repo).create_bank(
            trader.id, BankCreate(name="HBL", code="HBL")
        )
        service = BankLedgerService(repo)
        add_entry(service, trader, bank, "2024-01-01", added="100")
        add_entry(service, trader, other, "2024-01-01", added="900")
        repo.commit()

        ledger = service.get_ledger(trader.id, bank.id)

        assert len(ledger.rows) == 1
        assert ledger.summary.remaining_balance == Decimal("100")

    def test_bank_of_another_trader_not_found(self, repo):
        _, bank = make_bank(repo)
        other_trader, _ = make_bank(repo, "Other", "UBL")

        with pytest.raises(NotFoundError, match="Bank"):
            BankLedgerService(repo).get_ledger(other_trader.id, bank.id)


# --- Update Tests ---

class TestUpdateEntry:

    def test_partial_update_keeps_other_amount(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)
        row = add_entry(service, trader, bank, "2024-01-01", added="1000")
        repo.commit()

        updated = service.update_entry(
            trader.id, bank.id, row.record.id,
            BankLedgerEntryUpdate(amount_withdrawn=Decimal("400")),
        )
        repo.commit()

        assert updated.record.amount_added == Decimal("1000")
        assert updated.record.amount_withdrawn == Decimal("400")
        assert updated.record.remaining_amount == Decimal("600")
        assert updated.running_balance == Decimal("600")

    def test_update_to_both_zero_rejected(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)
        row = add_entry(service, trader, bank, "2024-01-01", added="1000")
        repo.commit()

        with pytest.raises(ValidationError):
            service.update_entry(
                trader.id, bank.id, row.record.id,
                BankLedgerEntryUpdate(amount_added=Decimal("0")),
            )

    def test_moving_date_reorders_ledger(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)
        first = add_entry(service, trader, bank, "2024-01-01", added="1000")
        add_entry(service, trader, bank, "2024-01-02", withdrawn="300")
        repo.commit()

        updated = service.update_entry(
            trader.id, bank.id, first.record.id,
            BankLedgerEntryUpdate(date="2024-01-05"),
        )

        assert updated.running_balance == Decimal("700")

    def test_explicit_null_clears_reference_person(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)
        row = service.create_entry(trader.id, bank.id, BankLedgerEntryCreate(
            date="2024-01-01",
            amount_added=Decimal("10"),
            reference_person="Bilal",
        ))
        repo.commit()

        updated = service.update_entry(
            trader.id, bank.id, row.record.id,
            BankLedgerEntryUpdate(reference_person=None, date=None),
        )

        assert updated.record.reference_person is None
        assert updated.record.date == "2024-01-01"


# --- Delete Tests ---

class TestDeleteEntry:

    def test_delete_entry(self, repo):
        trader, bank = make_bank(repo)
        service = BankLedgerService(repo)
        row = add_entry(service, trader, bank, "2024-01-01", added="10")
        repo.commit()

        service.delete_entry(trader.id, bank.id, row.record.id)
        repo.commit()

        assert service.get_ledger(trader.id, bank.id).rows == []

    def test_delete_missing_entry(self, repo):
        trader, bank = make_bank(repo)

        with pytest.raises(NotFoundError, match="Ledger entry"):
            BankLedgerService(repo).delete_entry(trader.id, bank.id, 999)
