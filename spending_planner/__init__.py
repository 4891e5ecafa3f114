"""Top-level package for the Daily Spending Planner.

The primary modules are:

* ``ledger`` – the pure allowance/carryover engine
* ``planner_storage`` – loading and saving the planner state
* ``export`` – clipboard text and CSV export
* ``visualization`` – Plotly figures over a computed ledger
* ``app`` – the Streamlit app that ties everything together

To run the planner from the command line you can execute:

```bash
streamlit run spending_planner/app.py
```
"""

from . import ledger  # noqa: F401  # re-exported for convenience
from .ledger import BudgetInput, DayEntry, Ledger, SavingsGoal, compute_ledger  # noqa: F401

__all__ = ["ledger", "BudgetInput", "DayEntry", "Ledger", "SavingsGoal", "compute_ledger"]
