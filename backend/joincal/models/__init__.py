from joincal.models.availability import Availability, AvailabilityJoiner
from joincal.models.calendar import Calendar

__all__ = [
    "Availability",
    "AvailabilityJoiner",
    "Calendar",
]
