"""Savings goal list operations.

Goals are kept as an ordered list of ``SavingsGoal`` records.  All helpers
return new lists so Streamlit session state can be replaced wholesale.
"""

from __future__ import annotations

import random
import string
from dataclasses import replace
from typing import Dict, List, Sequence, Tuple

from .ledger import SavingsGoal

SAVINGS_CATEGORIES: List[Tuple[str, str]] = [
    ("emergency", "Emergency Fund"),
    ("vacation", "Vacation"),
    ("retirement", "Retirement"),
    ("education", "Education"),
    ("home", "Home/Rent"),
    ("car", "Car/Transport"),
    ("health", "Health"),
    ("investment", "Investment"),
    ("gift", "Gifts"),
    ("other", "Other"),
]
DEFAULT_CATEGORY = "other"
DEFAULT_GOAL_NAME = "General Savings"
EDITABLE_FIELDS = {"name", "amount", "category"}

_ID_ALPHABET = string.ascii_lowercase + string.digits


class GoalRemovalError(ValueError):
    """Raised when removing a goal would leave the list empty."""


def category_label(key: str) -> str:
    """Return the display label for a category key, or the key itself."""
    return dict(SAVINGS_CATEGORIES).get(key, key)


def generate_goal_id() -> str:
    return "".join(random.choices(_ID_ALPHABET, k=7))


def default_goal() -> SavingsGoal:
    return SavingsGoal(id=generate_goal_id(), name=DEFAULT_GOAL_NAME, amount="0", category=DEFAULT_CATEGORY)


def savings_by_category(goals: Sequence[SavingsGoal]) -> Dict[str, float]:
    """Group positive goal amounts by category, in first-seen order."""
    grouped: Dict[str, float] = {}
    for goal in goals:
        amount = goal.value
        if amount > 0:
            grouped[goal.category] = grouped.get(goal.category, 0.0) + amount
    return grouped


def add_goal(goals: Sequence[SavingsGoal]) -> List[SavingsGoal]:
    """Append a blank goal."""
    return [*goals, SavingsGoal(id=generate_goal_id(), name="", amount="0", category=DEFAULT_CATEGORY)]


def update_goal(goals: Sequence[SavingsGoal], goal_id: str, field: str, value: str) -> List[SavingsGoal]:
    """Set ``field`` on the goal with ``goal_id``.

    Raises:
        ValueError: If ``field`` is not one of name, amount or category
    """
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Unsupported savings goal field '{field}'")
    return [replace(goal, **{field: value}) if goal.id == goal_id else goal for goal in goals]


def remove_goal(goals: Sequence[SavingsGoal], goal_id: str) -> List[SavingsGoal]:
    """Remove the goal with ``goal_id``.

    Raises:
        GoalRemovalError: If only one goal is left
    """
    if len(goals) <= 1:
        raise GoalRemovalError("You need at least one savings goal")
    return [goal for goal in goals if goal.id != goal_id]
