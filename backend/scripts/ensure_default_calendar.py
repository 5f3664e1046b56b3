#!/usr/bin/env python3
"""Create the Default calendar if it is missing (the API also does this on startup).
Run from backend: python scripts/ensure_default_calendar.py [CALENDAR_ID]
"""
import sys
from pathlib import Path

# Ensure backend is on path when run as script
backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from joincal.config import settings
from joincal.db.session import SessionLocal
from joincal.services.calendar_service import ensure_default_calendar


def main():
    calendar_id = sys.argv[1] if len(sys.argv) > 1 else settings.default_calendar_id
    db = SessionLocal()
    try:
        created = ensure_default_calendar(db, calendar_id)
        print(f"Calendar {calendar_id!r} {'created' if created else 'already exists'}.")
    except Exception as e:
        db.rollback()
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
