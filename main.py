"""
KPI Bonus Calculator

Computes performance bonuses from role-specific KPI bracket tables and
exports consolidated HR reports.
"""

import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from ui.cli import main


if __name__ == "__main__":
    main()
