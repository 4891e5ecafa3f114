#!/usr/bin/env python3
"""Direct launcher for the Daily Spending Planner.

This script launches Streamlit with the planner app from the project root.
"""

import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_path = project_root / "spending_planner" / "app.py"

if __name__ == "__main__":
    sys.path.insert(0, str(project_root))
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(app_path),
    ])
