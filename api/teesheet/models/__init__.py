"""All domain models importable from one place."""

from teesheet.models.schedule import (
    ApplicableDays,
    BookingMode,
    DayType,
    OperatingHours,
    ScheduleConfig,
    Season,
    SpecialDay,
    SpecialDayType,
    TimePeriod,
    TwilightMode,
)
from teesheet.models.tee_sheet import (
    ActiveSeason,
    ActiveSpecialDay,
    BookedBy,
    BookingGroup,
    EffectiveSchedule,
    ExistingBooking,
    Flight,
    OperatingWindow,
    Player,
    SchedulePreview,
    SlotSummary,
    TeeTimeBooking,
    TeeTimeSlot,
)

__all__ = [
    "ApplicableDays",
    "BookingMode",
    "DayType",
    "SpecialDayType",
    "TwilightMode",
    "TimePeriod",
    "OperatingHours",
    "Season",
    "SpecialDay",
    "ScheduleConfig",
    "ActiveSeason",
    "ActiveSpecialDay",
    "EffectiveSchedule",
    "TeeTimeSlot",
    "SlotSummary",
    "OperatingWindow",
    "SchedulePreview",
    "Player",
    "BookedBy",
    "BookingGroup",
    "ExistingBooking",
    "TeeTimeBooking",
    "Flight",
]
