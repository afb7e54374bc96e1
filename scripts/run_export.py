#!/usr/bin/env python3
"""
Run every configured master-data export once.

Usage:
    python3 scripts/run_export.py --config exports.yaml --schemas <module> [options]

Examples:
    # Export into memory and print the summary
    python3 scripts/run_export.py --config exports.yaml --schemas game.schemas

    # Export and save the collections to SQLite
    python3 scripts/run_export.py --config exports.yaml --schemas game.schemas \\
        --db-url sqlite:///masterdata.db
"""

from __future__ import annotations

import sys
from pathlib import Path

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from masterdata_export.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
