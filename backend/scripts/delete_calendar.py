#!/usr/bin/env python3
"""Delete a calendar and every availability posted on it.
Run from backend: python scripts/delete_calendar.py CALENDAR_ID
"""
import sys
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from joincal.core.errors import NotFound
from joincal.db.session import SessionLocal
from joincal.services.calendar_service import delete_calendar


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/delete_calendar.py CALENDAR_ID", file=sys.stderr)
        sys.exit(2)
    calendar_id = sys.argv[1]
    db = SessionLocal()
    try:
        removed = delete_calendar(db, calendar_id)
        print(f"Deleted calendar {calendar_id!r} and {removed} availability rows.")
    except NotFound:
        print(f"Calendar {calendar_id!r} not found.", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
