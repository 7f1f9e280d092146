"""
Tests for the running balance calculator and net-change formulas.

These are pure functions, so records here are plain dicts and
no database is involved.
"""

import itertools
import logging
from datetime import datetime
from decimal import Decimal

from hisaab_kitaab.services.balances import (
    bank_entry_net_change,
    bank_net_change,
    chronological_key,
    closing_balance,
    compute_running_balances,
    find_row,
    reconcile,
    riyal_amount,
    saudi_entry_net_change,
    saudi_net_change,
    select_for_display,
    special_net_change,
    summarize_bank_ledger,
    to_decimal,
)


def bank_entry(id, date, added=0, withdrawn=0, created_at=None):
    return {
        "id": id,
        "date": date,
        "amount_added": Decimal(str(added)),
        "amount_withdrawn": Decimal(str(withdrawn)),
        "created_at": created_at,
    }


def saudi_entry(id, date, time="10:00", pkr=0, rate=0, sar=0):
    return {
        "id": id,
        "date": date,
        "time": time,
        "pkr_amount": Decimal(str(pkr)),
        "riyal_rate": Decimal(str(rate)),
        "submitted_sar": Decimal(str(sar)),
        "created_at": None,
    }


THREE_BANK_ENTRIES = [
    bank_entry(1, "2024-01-01", added=1000),
    bank_entry(2, "2024-01-02", withdrawn=300),
    bank_entry(3, "2024-01-03", added=500),
]


# --- Formula Tests ---

class TestFormulas:

    def test_bank_net_change(self):
        assert bank_net_change(Decimal("1000"), Decimal("300")) == Decimal("700")

    def test_special_net_change(self):
        assert special_net_change(Decimal("250"), Decimal("400")) == Decimal("-150")

    def test_missing_amount_counts_as_zero(self):
        assert to_decimal(None) == Decimal("0")
        assert bank_net_change(None, Decimal("50")) == Decimal("-50")

    def test_floats_are_converted_exactly(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_formula_is_idempotent(self):
        record = bank_entry(1, "2024-01-01", added=120, withdrawn=20)
        assert bank_entry_net_change(record) == bank_entry_net_change(record)

    def test_riyal_amount_is_pkr_over_rate(self):
        assert riyal_amount(Decimal("7500"), Decimal("75")) == Decimal("100")

    def test_riyal_amount_rounds_to_four_places(self):
        assert riyal_amount(Decimal("28000"), Decimal("75")) == Decimal("373.3333")
        assert riyal_amount(Decimal("2"), Decimal("3")) == Decimal("0.6667")

    def test_zero_rate_forces_riyal_amount_to_zero(self):
        assert riyal_amount(Decimal("28000"), Decimal("0")) == Decimal("0")

    def test_zero_pkr_forces_riyal_amount_to_zero(self):
        assert riyal_amount(Decimal("0"), Decimal("75")) == Decimal("0")

    def test_pure_payment_is_negative_submitted_sar(self):
        """A payment is never cancelled out by its own submitted SAR."""
        change = saudi_net_change(Decimal("0"), Decimal("0"), Decimal("500"))
        assert change == Decimal("-500")

    def test_order_and_payment_in_one_entry(self):
        change = saudi_net_change(
            Decimal("15000"), Decimal("75"), Decimal("50")
        )
        assert change == Decimal("150")


# --- Running Balance Tests ---

class TestComputeRunningBalances:

    def test_empty_ledger(self):
        assert compute_running_balances([], bank_entry_net_change) == []
        assert closing_balance([]) == Decimal("0")

    def test_single_record(self):
        rows = compute_running_balances(
            [bank_entry(1, "2024-01-01", withdrawn=40)], bank_entry_net_change
        )
        assert len(rows) == 1
        assert rows[0].net_change == Decimal("-40")
        assert rows[0].running_balance == Decimal("-40")

    def test_three_bank_entries(self):
        rows = compute_running_balances(
            THREE_BANK_ENTRIES, bank_entry_net_change
        )
        assert [r.net_change for r in rows] == [
            Decimal("1000"), Decimal("-300"), Decimal("500"),
        ]
        assert [r.running_balance for r in rows] == [
            Decimal("1000"), Decimal("700"), Decimal("1200"),
        ]

    def test_input_order_does_not_matter(self):
        for permutation in itertools.permutations(THREE_BANK_ENTRIES):
            rows = compute_running_balances(
                permutation, bank_entry_net_change
            )
            assert [r.record["id"] for r in rows] == [1, 2, 3]
            assert closing_balance(rows) == Decimal("1200")

    def test_closing_balance_equals_sum_of_net_changes(self):
        records = [
            bank_entry(1, "2024-03-09", added=12.5),
            bank_entry(2, "2024-01-15", withdrawn=7.25),
            bank_entry(3, "2024-02-01", added=100, withdrawn=99.99),
        ]
        rows = compute_running_balances(records, bank_entry_net_change)
        expected = sum(bank_entry_net_change(r) for r in records)
        assert closing_balance(rows) == expected

    def test_same_date_ordered_by_time(self):
        records = [
            saudi_entry(1, "2024-02-01", time="15:00", sar=10),
            saudi_entry(2, "2024-02-01", time="09:30", pkr=7500, rate=75),
        ]
        rows = compute_running_balances(records, saudi_entry_net_change)
        assert [r.record["id"] for r in rows] == [2, 1]
        assert [r.running_balance for r in rows] == [
            Decimal("100"), Decimal("90"),
        ]

    def test_same_date_ordered_by_created_at(self):
        records = [
            bank_entry(1, "2024-01-01", added=5,
                       created_at=datetime(2024, 1, 1, 12, 0)),
            bank_entry(2, "2024-01-01", added=7,
                       created_at=datetime(2024, 1, 1, 8, 0)),
        ]
        rows = compute_running_balances(records, bank_entry_net_change)
        assert [r.record["id"] for r in rows] == [2, 1]

    def test_missing_created_at_sorts_first(self):
        records = [
            bank_entry(1, "2024-01-01", added=5,
                       created_at=datetime(2024, 1, 1, 12, 0)),
            bank_entry(2, "2024-01-01", added=7),
        ]
        assert chronological_key(records[1]) < chronological_key(records[0])

    def test_records_are_not_modified(self):
        record = bank_entry(1, "2024-01-01", added=10)
        before = dict(record)
        compute_running_balances([record], bank_entry_net_change)
        assert record == before

    def test_saudi_order_settled_by_payment(self):
        records = [
            saudi_entry(1, "2024-02-05", sar="373.33"),
            saudi_entry(2, "2024-02-01", pkr=28000, rate=75),
        ]
        rows = compute_running_balances(records, saudi_entry_net_change)
        assert abs(rows[0].net_change - Decimal("373.33")) <= Decimal("0.01")
        assert rows[1].net_change == Decimal("-373.33")
        assert abs(closing_balance(rows)) <= Decimal("0.01")

    def test_find_row(self):
        rows = compute_running_balances(
            THREE_BANK_ENTRIES, bank_entry_net_change
        )
        assert find_row(rows, 2).running_balance == Decimal("700")
        assert find_row(rows, 99) is None


# --- Summary Tests ---

class TestSummarizeBankLedger:

    def test_three_bank_entries(self):
        summary = summarize_bank_ledger(THREE_BANK_ENTRIES)
        assert summary.total_credit == Decimal("1500")
        assert summary.total_debit == Decimal("300")
        assert summary.remaining_balance == Decimal("1200")

    def test_remaining_balance_matches_closing_balance(self):
        rows = compute_running_balances(
            THREE_BANK_ENTRIES, bank_entry_net_change
        )
        summary = summarize_bank_ledger(THREE_BANK_ENTRIES)
        assert (
            summary.total_credit - summary.total_debit
            == summary.remaining_balance
            == closing_balance(rows)
        )

    def test_empty_ledger(self):
        summary = summarize_bank_ledger([])
        assert summary.remaining_balance == Decimal("0")


# --- Reconciliation Tests ---

class TestReconcile:

    def _rows(self):
        return compute_running_balances(
            THREE_BANK_ENTRIES, bank_entry_net_change
        )

    def test_matching_stored_balances(self):
        assert reconcile(self._rows(), bank_entry_net_change) is True

    def test_difference_within_tolerance(self):
        def stored(record):
            return bank_entry_net_change(record) + Decimal("0.003")

        assert reconcile(self._rows(), stored) is True

    def test_repeating_orders_match_stored_scale(self, caplog):
        """Hundreds of x.3333... orders stay within the stored 4 places."""
        records = [
            saudi_entry(i, "2024-01-01", pkr=1000, rate=3) for i in range(600)
        ]
        rows = compute_running_balances(records, saudi_entry_net_change)

        def stored(record):
            exact = record["pkr_amount"] / record["riyal_rate"]
            return exact.quantize(Decimal("0.0001"))

        with caplog.at_level(logging.WARNING):
            assert reconcile(rows, stored, scope="saudi") is True
        assert closing_balance(rows) == Decimal("333.3333") * 600
        assert "Running balance mismatch" not in caplog.text

    def test_mismatch_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            ok = reconcile(self._rows(), lambda r: Decimal("0"), scope="bank:1")

        assert ok is False
        assert "Running balance mismatch" in caplog.text


# --- Display Tests ---

class TestSelectForDisplay:

    def _rows(self):
        return compute_running_balances(
            THREE_BANK_ENTRIES, bank_entry_net_change
        )

    def test_no_filters_keeps_everything(self):
        rows = self._rows()
        assert select_for_display(rows) == rows

    def test_newest_first_keeps_balances(self):
        shown = select_for_display(self._rows(), newest_first=True)
        assert [r.record["id"] for r in shown] == [3, 2, 1]
        assert [r.running_balance for r in shown] == [
            Decimal("1200"), Decimal("700"), Decimal("1000"),
        ]

    def test_date_range_is_inclusive(self):
        shown = select_for_display(
            self._rows(), from_date="2024-01-02", to_date="2024-01-03"
        )
        assert [r.record["id"] for r in shown] == [2, 3]

    def test_filtered_rows_keep_full_ledger_balance(self):
        shown = select_for_display(self._rows(), from_date="2024-01-02")
        assert shown[0].running_balance == Decimal("700")
