"""Persistence helpers for the planner state.

The whole planner input is stored as a single JSON blob under the fixed
storage key.  Reads never fail: a missing or corrupt blob falls back to the
defaults, and individual fields are migrated one by one.
"""

from __future__ import annotations

import calendar
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .goals import DEFAULT_CATEGORY, default_goal, generate_goal_id
from .ledger import BudgetInput, SavingsGoal, parse_date

logger = logging.getLogger(__name__)


def default_range(today: Optional[date] = None) -> tuple[date, date]:
    """Return the first and last day of the month containing ``today``."""
    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def default_state(today: Optional[date] = None) -> BudgetInput:
    start, end = default_range(today)
    return BudgetInput(
        total_amount="",
        start_date=start,
        end_date=end,
        expenses={},
        savings_goals=[default_goal()],
    )


def _load_goals(raw: Any) -> List[SavingsGoal]:
    goals: List[SavingsGoal] = []
    if not isinstance(raw, list):
        return [default_goal()]
    for item in raw:
        if not isinstance(item, dict):
            continue
        goals.append(
            SavingsGoal(
                id=str(item.get('id') or generate_goal_id()),
                name=str(item.get('name') or ''),
                amount='' if item.get('amount') is None else str(item.get('amount')),
                category=str(item.get('category') or DEFAULT_CATEGORY),
            )
        )
    return goals or [default_goal()]


def _load_expenses(raw: Any) -> Dict[date, str]:
    if not isinstance(raw, dict):
        return {}
    expenses: Dict[date, str] = {}
    for key, value in raw.items():
        day = parse_date(key)
        if day is None or value is None:
            continue
        expenses[day] = str(value)
    return expenses


def _load_range_end(raw: Any, fallback: date) -> Optional[date]:
    # Absent -> default month; present but unparsable -> None (invalid range)
    if not raw:
        return fallback
    return parse_date(raw)


def payload_to_state(data: Dict[str, Any], today: Optional[date] = None) -> BudgetInput:
    """Build a ``BudgetInput`` from a stored payload, migrating each field."""
    start, end = default_range(today)
    total = data.get('totalAmount')
    return BudgetInput(
        total_amount='' if total is None else str(total),
        start_date=_load_range_end(data.get('startDate'), start),
        end_date=_load_range_end(data.get('endDate'), end),
        expenses=_load_expenses(data.get('expenses')),
        savings_goals=_load_goals(data.get('savingsGoals')),
    )


def state_to_payload(budget: BudgetInput) -> Dict[str, Any]:
    return {
        'totalAmount': budget.total_amount,
        'startDate': budget.start_date.isoformat() if budget.start_date else '',
        'endDate': budget.end_date.isoformat() if budget.end_date else '',
        'expenses': {day.isoformat(): value for day, value in sorted(budget.expenses.items())},
        'savingsGoals': [
            {'id': goal.id, 'name': goal.name, 'amount': goal.amount, 'category': goal.category}
            for goal in budget.savings_goals
        ],
    }


def load_state(path: Path | None = None, today: Optional[date] = None) -> BudgetInput:
    target = path or config.STATE_PATH
    if not target.exists():
        return default_state(today)
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable planner state at %s: %s", target, exc)
        return default_state(today)
    if not isinstance(data, dict):
        logger.warning("Ignoring planner state at %s: expected an object", target)
        return default_state(today)
    return payload_to_state(data, today)


def save_state(budget: BudgetInput, path: Path | None = None) -> None:
    """Write the full planner state.

    Raises:
        OSError: If the file cannot be written
    """
    target = path or config.STATE_PATH
    payload = state_to_payload(budget)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open('w', encoding='utf-8') as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)
    except OSError as e:
        raise OSError(f"Failed to save planner state to {target}: {e}") from e
    logger.debug("Saved planner state to %s", target)
