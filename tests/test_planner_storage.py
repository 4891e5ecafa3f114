import json
from datetime import date

import pytest

from spending_planner.goals import DEFAULT_GOAL_NAME
from spending_planner.ledger import BudgetInput, SavingsGoal, compute_ledger
from spending_planner.planner_storage import default_range, load_state, save_state, state_to_payload

TODAY = date(2026, 2, 10)


def _sample_budget():
    return BudgetInput(
        total_amount='2500',
        start_date=date(2026, 2, 1),
        end_date=date(2026, 2, 28),
        expenses={date(2026, 2, 3): '42.10', date(2026, 2, 1): '5'},
        savings_goals=[
            SavingsGoal(id='abc1234', name='Rainy day', amount='300', category='emergency'),
            SavingsGoal(id='def5678', name='Beach', amount='150', category='vacation'),
        ],
    )


def test_default_range_covers_current_month():
    assert default_range(TODAY) == (date(2026, 2, 1), date(2026, 2, 28))
    assert default_range(date(2024, 2, 29)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_missing_file_returns_defaults(tmp_path):
    budget = load_state(tmp_path / 'missing.json', today=TODAY)
    assert budget.total_amount == ''
    assert (budget.start_date, budget.end_date) == (date(2026, 2, 1), date(2026, 2, 28))
    assert budget.expenses == {}
    assert len(budget.savings_goals) == 1
    assert budget.savings_goals[0].name == DEFAULT_GOAL_NAME
    assert budget.savings_goals[0].category == 'other'


def test_round_trip_preserves_state(tmp_path):
    target = tmp_path / 'state.json'
    original = _sample_budget()
    save_state(original, target)
    assert load_state(target, today=TODAY) == original


def test_saved_payload_uses_iso_keys(tmp_path):
    target = tmp_path / 'nested' / 'state.json'
    save_state(_sample_budget(), target)
    data = json.loads(target.read_text(encoding='utf-8'))
    assert data['totalAmount'] == '2500'
    assert data['startDate'] == '2026-02-01'
    assert data['expenses'] == {'2026-02-01': '5', '2026-02-03': '42.10'}
    assert data['savingsGoals'][0] == {
        'id': 'abc1234', 'name': 'Rainy day', 'amount': '300', 'category': 'emergency',
    }


def test_corrupt_json_falls_back_to_defaults(tmp_path):
    target = tmp_path / 'state.json'
    target.write_text('{not json', encoding='utf-8')
    budget = load_state(target, today=TODAY)
    assert budget.total_amount == ''
    assert budget.start_date == date(2026, 2, 1)


def test_non_object_payload_falls_back_to_defaults(tmp_path):
    target = tmp_path / 'state.json'
    target.write_text('[1, 2, 3]', encoding='utf-8')
    budget = load_state(target, today=TODAY)
    assert budget.expenses == {}
    assert len(budget.savings_goals) == 1


def test_fields_are_migrated_individually(tmp_path):
    target = tmp_path / 'state.json'
    target.write_text(json.dumps({
        'totalAmount': 1200,
        'expenses': {'2026-02-04': 10, 'yesterday': '7', '2026-02-05': None},
        'savingsGoals': [{'id': 'x1', 'name': 'Old goal', 'amount': '50'}, 'junk'],
    }), encoding='utf-8')
    budget = load_state(target, today=TODAY)

    assert budget.total_amount == '1200'
    assert (budget.start_date, budget.end_date) == (date(2026, 2, 1), date(2026, 2, 28))
    assert budget.expenses == {date(2026, 2, 4): '10'}
    assert budget.savings_goals == [SavingsGoal(id='x1', name='Old goal', amount='50', category='other')]


def test_empty_goal_list_gets_default_goal(tmp_path):
    target = tmp_path / 'state.json'
    target.write_text(json.dumps({'savingsGoals': []}), encoding='utf-8')
    goals = load_state(target, today=TODAY).savings_goals
    assert len(goals) == 1
    assert goals[0].name == DEFAULT_GOAL_NAME
    assert len(goals[0].id) == 7


def test_unparsable_stored_date_reports_invalid_range(tmp_path):
    target = tmp_path / 'state.json'
    target.write_text(json.dumps({'totalAmount': '100', 'startDate': '2026-13-40', 'endDate': '2026-02-28'}),
                      encoding='utf-8')
    budget = load_state(target, today=TODAY)
    assert budget.start_date is None
    assert compute_ledger(budget, TODAY).is_valid_range is False


def test_blank_stored_date_falls_back_to_default_month(tmp_path):
    target = tmp_path / 'state.json'
    budget = BudgetInput(total_amount='10', start_date=None, end_date=date(2026, 2, 3),
                         savings_goals=[SavingsGoal(id='a')])
    assert state_to_payload(budget)['startDate'] == ''
    save_state(budget, target)
    # Blank dates are treated as absent and fall back to the default month
    assert load_state(target, today=TODAY).start_date == date(2026, 2, 1)


def test_save_failure_raises_oserror_with_path(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('x', encoding='utf-8')
    with pytest.raises(OSError, match='Failed to save planner state'):
        save_state(_sample_budget(), blocker / 'state.json')
