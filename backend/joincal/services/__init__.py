from joincal.services.availability_service import (
    create_availability,
    delete_availability,
    get_availability,
    list_availabilities,
    update_availability,
)
from joincal.services.calendar_service import (
    create_calendar,
    delete_calendar,
    ensure_default_calendar,
    get_calendar,
    list_calendars,
)
from joincal.services.membership_service import join, toggle_membership, unjoin
from joincal.services.recurrence import expand

__all__ = [
    "create_availability",
    "delete_availability",
    "get_availability",
    "list_availabilities",
    "update_availability",
    "create_calendar",
    "delete_calendar",
    "ensure_default_calendar",
    "get_calendar",
    "list_calendars",
    "join",
    "toggle_membership",
    "unjoin",
    "expand",
]
