"""
Priority Scoring - Quick Start Example

This script demonstrates the basic functionality of the board.
Data is kept in a temporary directory so your saved portfolio is untouched.

Usage:
    python examples/quickstart.py
"""

import logging
import sys
import tempfile
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from priority_scoring.board import create_board
from priority_scoring.data.storage import create_storage
from priority_scoring.errors import BackupFormatError


def main():
    workdir = Path(tempfile.mkdtemp(prefix="priority_scoring_"))
    print(f"Using storage in {workdir}")

    board = create_board(storage=create_storage(workdir))

    # 1. Dashboard with the sample portfolio
    print("\n" + "=" * 60)
    print("1. DASHBOARD")
    print("=" * 60)
    board.print_dashboard()

    # 2. Add a deliverable with one epic
    print("\n" + "=" * 60)
    print("2. ADD A DELIVERABLE")
    print("=" * 60)
    search = board.add_container(name="Search Relevance", owner="Discovery", strategy="average")
    board.add_sub_item(
        search.id,
        name="Semantic ranking",
        benefit=400000,
        fixed_cost=120000,
        operating_cost=30000,
        effort=21,
        risk=4,
        customer_impact=5,
    )
    print(board.get_dashboard()[['name', 'owner', 'score', 'band']].to_string(index=False))

    # 3. What-if: risk matters 50% more
    print("\n" + "=" * 60)
    print("3. WHAT-IF: RISK x1.5")
    print("=" * 60)
    board.set_multiplier('risk', 1.5)
    comparison = board.compare_what_if()
    print(comparison.to_string(index=False))
    for insight in board.analyzer.generate_insights(comparison):
        print(f"  • {insight}")
    board.reset_multipliers()

    # 4. Export and restore
    print("\n" + "=" * 60)
    print("4. EXPORT & RESTORE")
    print("=" * 60)
    csv_path = workdir / "priority_export.csv"
    backup_path = workdir / "backup.json"
    board.export_csv(csv_path)
    board.export_json(backup_path)
    print(f"CSV written to {csv_path}")

    try:
        board.import_json('{"not": "a list"}')
    except BackupFormatError as e:
        print(f"Import failed: {e}")

    board.import_json(backup_path)
    print(f"Restored {len(board.containers)} deliverables from {backup_path}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
