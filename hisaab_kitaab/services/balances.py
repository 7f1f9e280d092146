"""
Balance calculations shared by every ledger.

The net-change formulas in this module are the single source of
truth for what an entry contributes to its ledger. Services use
them when persisting an entry's own balance, and the running
balance calculator uses them when folding a whole ledger, so the
write path and the read path can never disagree.

Everything here is pure: no database access, no mutation of the
records passed in.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")

ZERO = Decimal("0")

# Floating/rounding slack allowed when reconciling a ledger
RECONCILE_TOLERANCE = Decimal("0.01")

# Scale of the Numeric(19, 4) money columns
MONEY_PLACES = Decimal("0.0001")


def to_decimal(value: Any) -> Decimal:
    """Coerce a stored or submitted amount to Decimal. Missing means 0."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


# --- Net-change formulas ---

def bank_net_change(amount_added: Any, amount_withdrawn: Any) -> Decimal:
    """Amount added minus amount withdrawn."""
    return to_decimal(amount_added) - to_decimal(amount_withdrawn)


def riyal_amount(pkr_amount: Any, riyal_rate: Any) -> Decimal:
    """
    SAR value of a PKR order.

    Only an entry with both a PKR amount and a rate is an order.
    Anything else is a pure payment, and its order amount is 0.
    It is never replaced by the submitted SAR, which would cancel
    the payment out of the balance.

    Rounded half-up to the stored scale, so a folded ledger and
    the stored balances agree to the last digit.
    """
    pkr = to_decimal(pkr_amount)
    rate = to_decimal(riyal_rate)
    if pkr > 0 and rate > 0:
        return (pkr / rate).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
    return ZERO


def saudi_net_change(
    pkr_amount: Any, riyal_rate: Any, submitted_sar: Any
) -> Decimal:
    """Riyal order amount minus SAR submitted against it."""
    return riyal_amount(pkr_amount, riyal_rate) - to_decimal(submitted_sar)


def special_net_change(name_rupees: Any, submitted_rupees: Any) -> Decimal:
    """Rupees owed minus rupees submitted."""
    return to_decimal(name_rupees) - to_decimal(submitted_rupees)


# Record-level adapters, usable on ORM rows and plain dicts alike

def bank_entry_net_change(record: Any) -> Decimal:
    return bank_net_change(
        _field(record, "amount_added"),
        _field(record, "amount_withdrawn"),
    )


def saudi_entry_net_change(record: Any) -> Decimal:
    return saudi_net_change(
        _field(record, "pkr_amount"),
        _field(record, "riyal_rate"),
        _field(record, "submitted_sar"),
    )


def special_entry_net_change(record: Any) -> Decimal:
    return special_net_change(
        _field(record, "name_rupees"),
        _field(record, "submitted_rupees"),
    )


# --- Running balance ---

@dataclass(frozen=True)
class RunningBalanceRow(Generic[R]):
    """One record annotated with its place in the ledger."""

    record: R
    net_change: Decimal
    running_balance: Decimal


def chronological_key(record: Any) -> tuple:
    """
    Sort key: date, then clock time, then insertion time.

    Dates are zero-padded YYYY-MM-DD, so string order is date
    order. Same for HH:MM[:SS] times. Records without a creation
    timestamp sort ahead of those with one on a full tie.
    """
    created_at = _field(record, "created_at")
    return (
        _field(record, "date") or "",
        _field(record, "time") or "",
        created_at is not None,
        created_at if created_at is not None else datetime.min,
    )


def compute_running_balances(
    records: Iterable[R],
    net_change: Callable[[R], Decimal],
) -> list[RunningBalanceRow[R]]:
    """
    Fold a ledger into running balances, oldest record first.

    The input order does not matter: records are sorted
    chronologically before folding, and the result stays in that
    order. Callers that display newest-first reorder the rows
    afterwards; they never recompute the balances.
    """
    ordered = sorted(records, key=chronological_key)

    cumulative = ZERO
    rows: list[RunningBalanceRow[R]] = []
    for record in ordered:
        change = net_change(record)
        cumulative += change
        rows.append(RunningBalanceRow(
            record=record,
            net_change=change,
            running_balance=cumulative,
        ))
    return rows


def closing_balance(rows: list[RunningBalanceRow]) -> Decimal:
    """Running balance after the last record, 0 for an empty ledger."""
    return rows[-1].running_balance if rows else ZERO


def find_row(rows: list[RunningBalanceRow], record_id: Any) -> RunningBalanceRow | None:
    for row in rows:
        if _field(row.record, "id") == record_id:
            return row
    return None


# --- Bank summary ---

@dataclass(frozen=True)
class LedgerSummary:
    total_credit: Decimal
    total_debit: Decimal
    remaining_balance: Decimal


def summarize_bank_ledger(records: Iterable[Any]) -> LedgerSummary:
    """
    Credit, debit and net totals for one bank.

    remaining_balance always equals the closing running balance
    of the same entries.
    """
    total_credit = ZERO
    total_debit = ZERO
    for record in records:
        total_credit += to_decimal(_field(record, "amount_added"))
        total_debit += to_decimal(_field(record, "amount_withdrawn"))
    return LedgerSummary(
        total_credit=total_credit,
        total_debit=total_debit,
        remaining_balance=total_credit - total_debit,
    )


# --- Reconciliation ---

def reconcile(
    rows: list[RunningBalanceRow],
    stored_balance: Callable[[Any], Any],
    scope: str = "ledger",
    tolerance: Decimal = RECONCILE_TOLERANCE,
) -> bool:
    """
    Check the closing balance against the per-record stored balances.

    The two only drift apart when a stored balance was written by
    something other than the formulas above (legacy rows, manual
    edits). A mismatch is logged, not raised: the running balance
    recomputed from raw fields is what gets shown.
    """
    expected = sum(
        (to_decimal(stored_balance(row.record)) for row in rows), ZERO
    )
    actual = closing_balance(rows)
    difference = abs(actual - expected)
    if difference > tolerance:
        logger.warning(
            "Running balance mismatch",
            extra={
                "scope": scope,
                "closing_balance": str(actual),
                "stored_total": str(expected),
                "difference": str(difference),
            },
        )
        return False
    return True


# --- Presentation ---

def select_for_display(
    rows: list[RunningBalanceRow[R]],
    from_date: str | None = None,
    to_date: str | None = None,
    newest_first: bool = False,
) -> list[RunningBalanceRow[R]]:
    """
    Filter rows to an inclusive date range and pick the display order.

    Running balances are carried through untouched, so a filtered
    row still shows its balance within the full ledger.
    """
    selected = [
        row for row in rows
        if (from_date is None or (_field(row.record, "date") or "") >= from_date)
        and (to_date is None or (_field(row.record, "date") or "") <= to_date)
    ]
    if newest_first:
        selected.reverse()
    return selected
