"""Clipboard text and CSV export of a computed ledger."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from . import config
from .formatting import format_currency
from .ledger import BudgetInput, Ledger, ledger_to_frame

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Date", "Day", "Allowance", "Spent", "Remaining"]


def format_clipboard_text(ledger: Ledger) -> str:
    """Render the plan as one line per day.

    Spent and remaining are only listed for days where something was spent.
    """
    lines = []
    for day in ledger.days:
        line = f"{day.day_name}, {day.formatted_date} → Allowance: {format_currency(day.allowance)}"
        if day.spent > 0:
            line += f", Spent: {format_currency(day.spent)}, Remaining: {format_currency(day.remaining)}"
        lines.append(line)
    return "\n".join(lines)


def ledger_to_csv(ledger: Ledger) -> str:
    """Render the ledger as CSV with amounts fixed to two decimals."""
    frame = ledger_to_frame(ledger)[CSV_COLUMNS]
    return frame.to_csv(index=False, float_format="%.2f", lineterminator="\n")


def csv_filename(start: Optional[date], end: Optional[date]) -> str:
    start_key = start.isoformat() if start else "start"
    end_key = end.isoformat() if end else "end"
    return f"spending-plan-{start_key}-to-{end_key}.csv"


def write_csv(ledger: Ledger, budget: BudgetInput, directory: Path | None = None) -> Path:
    """Write the ledger CSV into ``directory`` (defaults to the reports dir).

    Raises:
        OSError: If the file cannot be written
    """
    target_dir = directory or config.REPORTS_DIR
    target = target_dir / csv_filename(budget.start_date, budget.end_date)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(ledger_to_csv(ledger), encoding="utf-8")
    except OSError as e:
        raise OSError(f"Failed to export spending plan to {target}: {e}") from e
    logger.info("Exported %d ledger rows to %s", len(ledger.days), target)
    return target
