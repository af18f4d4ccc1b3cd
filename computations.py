"""
Business logic and computations for Financey.
Every mutation of LedgerState goes through the functions here.
"""
from __future__ import annotations
from typing import Dict, Optional

from config import AppSettings
from csv_handler import parse_expenses_csv
from exceptions import NothingPendingError
from logger import setup_logger
from models import ExpenseRecord, LedgerState
from utils import round_money

logger = setup_logger(__name__)

MANUAL_DATE = "N/A"


def record_cost(r: ExpenseRecord) -> float:
    """Cost used for totals; partial records without a cost count as zero"""
    return 0.0 if r.cost is None else float(r.cost)


def shared_half(cost: float) -> float:
    """
    Each party's share of a shared cost.
    Both halves use the same rounding, so odd cents give two equal halves
    (4.01 -> 2.01 + 2.01) rather than a split that sums back to the cost.
    """
    return round_money(cost / 2)


def current_pending(state: LedgerState) -> Optional[ExpenseRecord]:
    """Record at the cursor, or None when nothing is pending"""
    if state.cursor < len(state.pending):
        return state.pending[state.cursor]
    return None


def remaining_count(state: LedgerState) -> int:
    """Number of records still waiting for classification"""
    return len(state.pending) - state.cursor


def import_csv(state: LedgerState, text: str, settings: Optional[AppSettings] = None) -> int:
    """
    Replace the pending queue with records parsed from CSV text.
    Unclassified records from an earlier import are discarded; classified lists
    and totals are kept. If parsing fails the state is left as it was.
    Returns the number of records imported.
    """
    records = parse_expenses_csv(text, settings)
    dropped = remaining_count(state)
    state.pending = records
    state.cursor = 0
    logger.info(f"Imported {len(records)} records ({dropped} unclassified records discarded)")
    return len(records)


def add_manual_item(state: LedgerState, name: str, cost: float) -> ExpenseRecord:
    """Queue a hand-entered item behind any records still pending"""
    record = ExpenseRecord(name=name, cost=round_money(cost), date=MANUAL_DATE)
    state.pending.append(record)
    logger.info(f"Added manual item {name!r} ({record.cost:.2f})")
    return record


def _take_pending(state: LedgerState) -> ExpenseRecord:
    record = current_pending(state)
    if record is None:
        raise NothingPendingError(
            "No pending item to classify",
            details={"cursor": state.cursor, "pending": len(state.pending)},
        )
    return record


def classify_personal(state: LedgerState) -> ExpenseRecord:
    """Mark the pending record as spent on me"""
    record = _take_pending(state)
    state.personal.append(record)
    state.my_total = round_money(state.my_total + record_cost(record))
    state.cursor += 1
    logger.debug(f"Personal: {record.name!r} my_total={state.my_total:.2f}")
    return record


def classify_shared(state: LedgerState) -> ExpenseRecord:
    """Mark the pending record as shared: half to me, half owed by the co-payer"""
    record = _take_pending(state)
    half = shared_half(record_cost(record))
    state.shared.append(record)
    state.my_total = round_money(state.my_total + half)
    state.owed_total = round_money(state.owed_total + half)
    state.cursor += 1
    logger.debug(f"Shared: {record.name!r} half={half:.2f} owed_total={state.owed_total:.2f}")
    return record


def compute_summary(state: LedgerState) -> Dict[str, float]:
    """
    Summary figures for display and reports.
    Returns dict with spent_on_me, owed_to_me, personal_count, shared_count, pending_count
    """
    return {
        "spent_on_me": state.my_total,
        "owed_to_me": state.owed_total,
        "personal_count": len(state.personal),
        "shared_count": len(state.shared),
        "pending_count": remaining_count(state),
    }
