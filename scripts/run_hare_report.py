#!/usr/bin/env python3
"""Bonanza Creek juvenile hare report runner.

Usage:
    python scripts/run_hare_report.py data/bonanza_hares.csv
    python scripts/run_hare_report.py data/bonanza_hares.csv --config scripts/user_config.py
    python scripts/run_hare_report.py --config scripts/user_config.py --output-dir /tmp/hares

Note: User config in scripts/user_config.py, expert defaults in src/bonanza/schemas/param.py
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from bonanza.cli.run_report import main


if __name__ == "__main__":
    sys.exit(main())
