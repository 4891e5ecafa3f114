"""Daily allowance and carryover calculations.

This module contains the pure ledger engine.  Given the raw planner input
(total amount, savings goals, a date range and a sparse map of logged
expenses) it produces a day-by-day ledger with the allowance, spent and
remaining amount of every day plus the aggregate totals shown by the UI.

The functions here do no I/O and never raise for bad input: unparsable
amounts are treated as zero and an invalid date range is reported through
``Ledger.is_valid_range``.  They can therefore be unit tested and reused
outside Streamlit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

import pandas as pd

LEDGER_COLUMNS = ["Date", "Day", "Allowance", "Spent", "Remaining", "Logged"]


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------


def parse_amount(value: Any, allow_negative: bool = False) -> float:
    """Parse a free-text amount, falling back to ``0.0``.

    Blank, unparsable and non-finite values become zero.  Negative values
    become zero unless ``allow_negative`` is set.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    if amount < 0 and not allow_negative:
        return 0.0
    return amount


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO ``YYYY-MM-DD`` value into a calendar date.

    ``datetime`` values are reduced to their date.  Returns ``None`` when the
    value cannot be interpreted.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class SavingsGoal:
    id: str
    name: str = ""
    amount: str = "0"
    category: str = "other"

    @property
    def value(self) -> float:
        return parse_amount(self.amount)


@dataclass
class BudgetInput:
    """Raw planner state as entered by the user."""

    total_amount: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    expenses: Dict[date, str] = field(default_factory=dict)
    savings_goals: List[SavingsGoal] = field(default_factory=list)


@dataclass(frozen=True)
class DayEntry:
    date: date
    allowance: float
    spent: float
    remaining: float
    has_entry: bool = False

    @property
    def date_key(self) -> str:
        return self.date.isoformat()

    @property
    def day_name(self) -> str:
        return self.date.strftime("%A")

    @property
    def formatted_date(self) -> str:
        # e.g. "October 5, 2026"
        return f"{self.date.strftime('%B')} {self.date.day}, {self.date.year}"

    @property
    def is_overspent(self) -> bool:
        return self.remaining < 0


@dataclass(frozen=True)
class Ledger:
    total_amount: float
    total_savings: float
    available: float
    daily_allowance: float
    days_count: int
    days: List[DayEntry]
    is_valid_range: bool
    total_spent: float
    total_remaining: float
    spent_percentage: float
    spent_up_to_today: float

    @property
    def has_plan(self) -> bool:
        """Whether there is enough input to show a spending plan."""
        return self.total_amount > 0 and self.is_valid_range


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def sum_savings(goals: Sequence[SavingsGoal]) -> float:
    """Sum goal amounts; a goal that fails to parse contributes zero."""
    return sum((goal.value for goal in goals), 0.0)


def _explicit_expense(expenses: Mapping[date, str], day: date) -> Optional[float]:
    raw = expenses.get(day)
    if raw is None or raw == "":
        return None
    return parse_amount(raw, allow_negative=True)


def compute_ledger(budget: BudgetInput, today: date | datetime) -> Ledger:
    """Compute the day-by-day ledger for ``budget``.

    Days without a logged expense are assumed to have spent their whole
    allowance.  Each day's remaining amount, positive or negative, is carried
    into the next day's allowance.

    Args:
        budget: Raw planner input
        today: Current local date (a ``datetime`` is reduced to its date)

    Returns:
        A fully populated ``Ledger``.  An invalid date range yields an empty
        ledger with ``is_valid_range`` set to ``False``.
    """
    if isinstance(today, datetime):
        today = today.date()

    total = parse_amount(budget.total_amount)
    total_savings = sum_savings(budget.savings_goals)
    available = max(0.0, total - total_savings)

    start, end = budget.start_date, budget.end_date
    if start is None or end is None or start > end:
        return Ledger(
            total_amount=total,
            total_savings=total_savings,
            available=available,
            daily_allowance=0.0,
            days_count=0,
            days=[],
            is_valid_range=False,
            total_spent=0.0,
            total_remaining=available,
            spent_percentage=0.0,
            spent_up_to_today=0.0,
        )

    days_count = (end - start).days + 1
    base_daily = available / days_count if days_count > 0 else 0.0

    days: List[DayEntry] = []
    carryover = 0.0
    for day in iter_dates(start, end):
        allowance = base_daily + carryover
        logged = _explicit_expense(budget.expenses, day)
        spent = allowance if logged is None else logged
        remaining = allowance - spent
        carryover = remaining
        days.append(DayEntry(day, allowance, spent, remaining, has_entry=logged is not None))

    total_spent = sum(entry.spent for entry in days)
    spent_percentage = min(100.0, total_spent / available * 100) if available > 0 else 0.0
    spent_up_to_today = sum(entry.spent for entry in days if entry.date <= today)

    return Ledger(
        total_amount=total,
        total_savings=total_savings,
        available=available,
        daily_allowance=base_daily,
        days_count=days_count,
        days=days,
        is_valid_range=True,
        total_spent=total_spent,
        total_remaining=available - total_spent,
        spent_percentage=spent_percentage,
        spent_up_to_today=spent_up_to_today,
    )


def ledger_to_frame(ledger: Ledger) -> pd.DataFrame:
    """Return one row per ledger day for tables, charts and exports."""
    if not ledger.days:
        return pd.DataFrame(columns=LEDGER_COLUMNS)
    rows = [
        {
            "Date": entry.formatted_date,
            "Day": entry.day_name,
            "Allowance": entry.allowance,
            "Spent": entry.spent,
            "Remaining": entry.remaining,
            "Logged": entry.has_entry,
        }
        for entry in ledger.days
    ]
    frame = pd.DataFrame(rows, columns=LEDGER_COLUMNS)
    frame.index = pd.DatetimeIndex([entry.date for entry in ledger.days], name="Day Date")
    return frame
