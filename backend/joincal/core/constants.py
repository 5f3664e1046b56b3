"""
Centralized constants for calendars, availability records and the visible window.

Field limits mirror the persisted column sizes (see alembic migration 001); change both together.
"""
import re

# Calendars
DEFAULT_CALENDAR_ID = "Default"
DEFAULT_CALENDAR_COLOR = "#66BB6A"
CALENDAR_ID_PATTERN = re.compile(r"^[A-Za-z0-9]{1,20}$")
MSG_INVALID_CALENDAR_ID = "Calendar ID must be alphanumeric and at most 20 characters"

# Availability fields
HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")
TIME_SLOT_MAX_LENGTH = 100
LOCATION_MAX_LENGTH = 200
NAME_MAX_LENGTH = 50
ICON_MAX_LENGTH = 50
SECTION_DAY = "day"
SECTION_EVENING = "evening"
SECTIONS = (SECTION_DAY, SECTION_EVENING)

# Fields a client may send on create; anything else is dropped
AVAILABILITY_CREATE_FIELDS = (
    "calendar_id",
    "date",
    "time_slot",
    "location",
    "name",
    "color",
    "icon",
    "recurring",
    "section",
)
# Fields a client may change on update: name/color/date/joiners stay as created
AVAILABILITY_UPDATE_FIELDS = ("time_slot", "location", "icon", "recurring", "section")
AVAILABILITY_REQUIRED_FIELDS = ("time_slot", "location", "name", "date")

# Recurrence: weekly, forever
RECURRENCE_STEP_DAYS = 7
DEFAULT_WINDOW_DAYS = 7
