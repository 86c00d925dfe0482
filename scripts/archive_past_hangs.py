#!/usr/bin/env python3
"""
One-off script to move hangs whose date has passed to the "past" list.

The running app does this on a schedule; this script is for databases that
were offline, or to preview what the job would do.

Usage:
    python scripts/archive_past_hangs.py [--dry-run]

Options:
    --dry-run    Show what would be archived without making changes
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session

from lets_hang.core.database import create_db_and_tables, engine
from lets_hang.hangs.store import archive_past_hangs, find_past_hangs


def main(dry_run: bool = False):
    """List active hangs dated before today and archive them."""
    create_db_and_tables()

    with Session(engine) as session:
        hangs = find_past_hangs(session)

        if not hangs:
            print("No active hangs in the past.")
            return

        print(f"Found {len(hangs)} active hang(s) dated before today:\n")
        for hang in hangs:
            print(f"  {hang.code}  {hang.date}  {hang.title}  ({hang.going_count} going)")
        print()

        if dry_run:
            print("--- DRY RUN: No changes made ---")
            return

        archived = archive_past_hangs(session)
        print(f"Complete: {archived} hang(s) moved to past")


if __name__ == "__main__":
    dry_run = "--dry-run" in sys.argv
    main(dry_run=dry_run)
