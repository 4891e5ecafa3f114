from datetime import date

import pytest

from spending_planner.export import csv_filename, format_clipboard_text, ledger_to_csv, write_csv
from spending_planner.ledger import BudgetInput, SavingsGoal, compute_ledger

TODAY = date(2026, 10, 18)


def _budget(expenses=None):
    return BudgetInput(
        total_amount='1000',
        start_date=date(2026, 10, 1),
        end_date=date(2026, 10, 2),
        expenses=expenses or {},
        savings_goals=[SavingsGoal(id='g1', amount='200')],
    )


def test_clipboard_text_lists_every_day():
    ledger = compute_ledger(_budget({date(2026, 10, 1): '300', date(2026, 10, 2): '0'}), TODAY)
    assert format_clipboard_text(ledger).split('\n') == [
        'Thursday, October 1, 2026 → Allowance: 400.00, Spent: 300.00, Remaining: 100.00',
        'Friday, October 2, 2026 → Allowance: 500.00',
    ]


def test_clipboard_text_groups_thousands():
    budget = _budget()
    budget.total_amount = '10200'
    ledger = compute_ledger(budget, TODAY)
    first_line = format_clipboard_text(ledger).split('\n')[0]
    assert 'Allowance: 5,000.00, Spent: 5,000.00, Remaining: 0.00' in first_line


def test_clipboard_text_empty_for_invalid_range():
    budget = _budget()
    budget.end_date = date(2026, 9, 1)
    assert format_clipboard_text(compute_ledger(budget, TODAY)) == ''


def test_csv_has_header_and_fixed_decimals():
    ledger = compute_ledger(_budget({date(2026, 10, 1): '300'}), TODAY)
    lines = ledger_to_csv(ledger).splitlines()
    assert lines[0] == 'Date,Day,Allowance,Spent,Remaining'
    assert lines[1] == '"October 1, 2026",Thursday,400.00,300.00,100.00'
    assert lines[2] == '"October 2, 2026",Friday,500.00,500.00,0.00'
    assert len(lines) == 3


def test_csv_for_invalid_range_is_header_only():
    budget = _budget()
    budget.start_date = None
    assert ledger_to_csv(compute_ledger(budget, TODAY)).splitlines() == ['Date,Day,Allowance,Spent,Remaining']


def test_csv_filename_embeds_range():
    assert csv_filename(date(2026, 10, 1), date(2026, 10, 31)) == 'spending-plan-2026-10-01-to-2026-10-31.csv'


def test_write_csv(tmp_path):
    budget = _budget()
    target = write_csv(compute_ledger(budget, TODAY), budget, tmp_path / 'reports')
    assert target.name == 'spending-plan-2026-10-01-to-2026-10-02.csv'
    assert target.read_text(encoding='utf-8').startswith('Date,Day,Allowance,Spent,Remaining\n')


def test_write_csv_failure_raises(tmp_path):
    blocker = tmp_path / 'reports'
    blocker.write_text('not a directory', encoding='utf-8')
    budget = _budget()
    with pytest.raises(OSError, match='Failed to export spending plan'):
        write_csv(compute_ledger(budget, TODAY), budget, blocker)
