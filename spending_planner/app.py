"""Daily Spending Planner - Streamlit entry point.

Run with ``streamlit run spending_planner/app.py`` or ``python run_planner.py``.
The raw planner input lives in ``st.session_state`` and is written to the
planner state file after every change; the ledger is recomputed from scratch
on every rerun.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Dict

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from spending_planner import config
from spending_planner.export import csv_filename, format_clipboard_text, ledger_to_csv, write_csv
from spending_planner.formatting import escape_dollar_for_markdown, format_currency, format_signed
from spending_planner.goals import (
    SAVINGS_CATEGORIES,
    GoalRemovalError,
    add_goal,
    category_label,
    remove_goal,
    savings_by_category,
    update_goal,
)
from spending_planner.ledger import BudgetInput, DayEntry, Ledger, compute_ledger, ledger_to_frame, sum_savings
from spending_planner.planner_storage import load_state, save_state
from spending_planner.visualization import create_allowance_chart, create_cumulative_chart

logger = logging.getLogger(__name__)

STATE_KEY = 'planner_state'
CATEGORY_KEYS = [key for key, _ in SAVINGS_CATEGORIES]
DAY_COLUMNS = 3


def main() -> None:
    st.set_page_config(page_title="Daily Spending Planner", page_icon="💰", layout="centered")
    config.configure_logging()

    st.title("💰 Daily Spending Planner")
    st.caption("Plan and track your daily spending")

    budget = _ensure_planner_state()
    budget = _render_budget_inputs(budget)
    budget = _render_savings_goals(budget)

    ledger = compute_ledger(budget, date.today())

    if not ledger.has_plan:
        st.info(_guidance_message(budget, ledger))
        return

    _render_summary(ledger)

    days_tab, chart_tab, export_tab = st.tabs(["📅 Days", "📈 Chart", "📤 Export"])
    with days_tab:
        _render_day_grid(budget, ledger)
    with chart_tab:
        st.plotly_chart(create_allowance_chart(ledger), use_container_width=True)
        st.plotly_chart(create_cumulative_chart(ledger), use_container_width=True)
    with export_tab:
        _render_export(budget, ledger)


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


def _ensure_planner_state() -> BudgetInput:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = load_state()
    return st.session_state[STATE_KEY]


def _persist_state(budget: BudgetInput) -> bool:
    try:
        save_state(budget)
    except OSError as exc:
        logger.error("Could not persist planner state: %s", exc)
        st.error(f"Could not save your plan: {exc}")
        return False
    return True


def _update_state(budget: BudgetInput, **changes) -> BudgetInput:
    """Replace fields of the session budget and persist the result."""
    updated = replace(budget, **changes)
    st.session_state[STATE_KEY] = updated
    _persist_state(updated)
    return updated


def _set_expense(budget: BudgetInput, day: date, value: str) -> BudgetInput:
    expenses: Dict[date, str] = dict(budget.expenses)
    if value == "":
        expenses.pop(day, None)
    else:
        expenses[day] = value
    return _update_state(budget, expenses=expenses)


def _rerun() -> None:
    rerun_fn = getattr(st, 'rerun', None) or getattr(st, 'experimental_rerun', None)
    if rerun_fn:
        rerun_fn()


def _guidance_message(budget: BudgetInput, ledger: Ledger) -> str:
    """Explain what is missing when there is no plan to show."""
    if not ledger.is_valid_range and budget.start_date and budget.end_date:
        return "Please select a valid date range (end date must be on or after the start date)."
    return "Enter your total amount and date range to see your daily spending plan"


def _progress_label(ledger: Ledger) -> str:
    spent = escape_dollar_for_markdown(ledger.total_spent)
    available = escape_dollar_for_markdown(ledger.available)
    return f"**Spending progress:** {spent} / {available}"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


def _render_budget_inputs(budget: BudgetInput) -> BudgetInput:
    with st.container(border=True):
        col_total, col_savings = st.columns(2)
        total = col_total.text_input("👛 Total Amount", value=budget.total_amount, placeholder="e.g., 5000")
        if total != budget.total_amount:
            budget = _update_state(budget, total_amount=total)

        goal_count = len(budget.savings_goals)
        col_savings.metric("🐷 Total Savings", format_currency(sum_savings(budget.savings_goals)))
        col_savings.caption(f"From {goal_count} goal{'s' if goal_count != 1 else ''} below")

        col_start, col_end = st.columns(2)
        start = col_start.date_input("📅 Start Date", value=budget.start_date)
        end = col_end.date_input("📅 End Date", value=budget.end_date)
        if start != budget.start_date or end != budget.end_date:
            budget = _update_state(budget, start_date=start, end_date=end)
    return budget


def _render_savings_goals(budget: BudgetInput) -> BudgetInput:
    with st.container(border=True):
        header_col, button_col = st.columns([3, 1])
        header_col.subheader("🎯 Savings Goals")
        if button_col.button("➕ Add Goal"):
            budget = _update_state(budget, savings_goals=add_goal(budget.savings_goals))

        for index, goal in enumerate(budget.savings_goals, start=1):
            col_cat, col_name, col_amount, col_remove = st.columns([2, 3, 2, 1])
            category = col_cat.selectbox(
                "Category",
                CATEGORY_KEYS,
                index=CATEGORY_KEYS.index(goal.category) if goal.category in CATEGORY_KEYS else len(CATEGORY_KEYS) - 1,
                format_func=category_label,
                key=f"goal_category_{goal.id}",
                label_visibility="collapsed",
            )
            name = col_name.text_input(
                "Goal name", value=goal.name, placeholder="Goal name",
                key=f"goal_name_{goal.id}", label_visibility="collapsed",
            )
            amount = col_amount.text_input(
                "Amount", value=goal.amount, placeholder="Amount",
                key=f"goal_amount_{goal.id}", label_visibility="collapsed",
            )
            for field, value in (("category", category), ("name", name), ("amount", amount)):
                if value != getattr(goal, field):
                    budget = _update_state(
                        budget, savings_goals=update_goal(budget.savings_goals, goal.id, field, value)
                    )
            if col_remove.button("✖", key=f"goal_remove_{goal.id}", help=f"Remove goal {index}"):
                try:
                    budget = _update_state(budget, savings_goals=remove_goal(budget.savings_goals, goal.id))
                except GoalRemovalError as exc:
                    st.warning(f"Cannot remove: {exc}")
                else:
                    _rerun()

        by_category = savings_by_category(budget.savings_goals)
        if by_category:
            st.markdown("**By category**")
            cols = st.columns(min(len(by_category), 4))
            for i, (category, amount) in enumerate(by_category.items()):
                cols[i % len(cols)].metric(category_label(category), format_currency(amount))
    return budget


# ---------------------------------------------------------------------------
# Ledger views
# ---------------------------------------------------------------------------


def _render_summary(ledger: Ledger) -> None:
    col_available, col_daily = st.columns(2)
    col_available.metric("Available to Spend", format_currency(ledger.available))
    col_daily.metric("Daily Allowance", format_currency(ledger.daily_allowance))

    with st.container(border=True):
        st.markdown(_progress_label(ledger))
        st.progress(min(max(ledger.spent_percentage, 0.0), 100.0) / 100)
        col_spent, col_today, col_left = st.columns(3)
        col_spent.metric("Total Spent", format_currency(ledger.total_spent))
        col_today.metric("Spent Up To Today", format_currency(ledger.spent_up_to_today))
        col_left.metric("Total Remaining", format_currency(ledger.total_remaining))


def _render_day_card(budget: BudgetInput, day: DayEntry, today: date) -> BudgetInput:
    with st.container(border=True):
        heading = f"**{day.day_name}**"
        if day.date == today:
            heading += " · :blue[Today]"
        st.markdown(heading)
        st.caption(day.formatted_date)
        st.markdown(f"### {format_currency(day.allowance)}")
        current = budget.expenses.get(day.date, "")
        value = st.text_input(
            "Spent", value=current, placeholder="Spent",
            key=f"expense_{day.date_key}", label_visibility="collapsed",
        )
        if day.spent > 0:
            color = "red" if day.is_overspent else "green"
            st.markdown(f":{color}[{format_signed(day.remaining)} remaining]")
    if value != current:
        budget = _set_expense(budget, day.date, value)
        _rerun()
    return budget


def _render_day_grid(budget: BudgetInput, ledger: Ledger) -> None:
    st.subheader(f"{ledger.days_count} Days")
    today = date.today()
    for offset in range(0, len(ledger.days), DAY_COLUMNS):
        columns = st.columns(DAY_COLUMNS)
        for column, day in zip(columns, ledger.days[offset:offset + DAY_COLUMNS]):
            with column:
                budget = _render_day_card(budget, day, today)


def _render_export(budget: BudgetInput, ledger: Ledger) -> None:
    st.markdown("#### Copy plan")
    st.caption("Use the copy button on the block below to copy the plan to your clipboard.")
    plan_text = format_clipboard_text(ledger)
    st.code(plan_text, language=None)

    filename = csv_filename(budget.start_date, budget.end_date)
    col_csv, col_txt, col_save = st.columns(3)
    col_csv.download_button("⬇️ Export CSV", data=ledger_to_csv(ledger), file_name=filename, mime="text/csv")
    col_txt.download_button(
        "⬇️ Export Text", data=plan_text, file_name=filename.replace(".csv", ".txt"), mime="text/plain"
    )
    if col_save.button("💾 Save CSV to reports"):
        try:
            target = write_csv(ledger, budget)
        except OSError as exc:
            st.error(f"Export failed: {exc}")
        else:
            st.success(f"Saved {target.name} to {target.parent}")

    with st.expander("Ledger table"):
        st.dataframe(ledger_to_frame(ledger), use_container_width=True, hide_index=True)


if __name__ == '__main__':
    main()
