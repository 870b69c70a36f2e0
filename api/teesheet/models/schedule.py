"""Schedule configuration models.

ScheduleConfig = the base weekly setup for one golf course (tee hours per day
type, booking mode, twilight rule, time periods).
Season = a priority-ranked range of the year that overrides base values.
SpecialDay = a dated or recurring exception (holiday, closure, custom hours)
that outranks any season.

These are read-only snapshots; whoever stores and edits them lives outside
this package.
"""

import enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# "HH:MM", 24-hour wall clock
ClockTime = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]
# "MM-DD" for recurring special days, "YYYY-MM-DD" otherwise
SpecialDate = Annotated[str, Field(pattern=r"^(\d{4}-)?(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")]


class DayType(str, enum.Enum):
    WEEKDAY = "WEEKDAY"
    WEEKEND = "WEEKEND"


class ApplicableDays(str, enum.Enum):
    WEEKDAY = "WEEKDAY"
    WEEKEND = "WEEKEND"
    ALL = "ALL"


class TwilightMode(str, enum.Enum):
    FIXED = "FIXED"  # fixed clock time
    SUNSET = "SUNSET"  # minutes before an approximated sunset


class SpecialDayType(str, enum.Enum):
    WEEKEND = "WEEKEND"  # play weekend hours on any day
    HOLIDAY = "HOLIDAY"  # public holiday, weekend hours
    CLOSED = "CLOSED"  # no tee times at all
    CUSTOM = "CUSTOM"  # own hours and periods


class BookingMode(str, enum.Enum):
    EIGHTEEN = "EIGHTEEN"  # single column, everyone starts on hole 1
    CROSS = "CROSS"  # dual columns, hole 1 and hole 10 start together


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class TimePeriod(_Frozen):
    """A named window of the day with its own tee interval."""

    id: str
    name: str
    start_time: ClockTime
    end_time: ClockTime | None = None  # None = until last tee
    interval_minutes: int = Field(gt=0)
    is_prime_time: bool = False
    applicable_days: ApplicableDays = ApplicableDays.ALL
    sort_order: int = 0

    def applies_to(self, day_type: DayType) -> bool:
        return self.applicable_days == ApplicableDays.ALL or self.applicable_days.value == day_type.value


class OperatingHours(_Frozen):
    first_tee: ClockTime
    last_tee: ClockTime
    booking_mode: BookingMode


class Season(_Frozen):
    id: str
    name: str
    start_month: int = Field(ge=1, le=12)
    start_day: int = Field(ge=1, le=31)
    end_month: int = Field(ge=1, le=12)
    end_day: int = Field(ge=1, le=31)
    is_recurring: bool = True
    priority: int = 0

    override_first_tee: ClockTime | None = None
    override_last_tee: ClockTime | None = None
    override_booking_window: int | None = Field(default=None, ge=0)
    override_twilight_time: ClockTime | None = None
    override_time_periods: bool = False
    time_periods: list[TimePeriod] = []

    weekday_booking_mode: BookingMode | None = None
    weekend_booking_mode: BookingMode | None = None

    def booking_mode_for(self, day_type: DayType) -> BookingMode | None:
        if day_type == DayType.WEEKEND:
            return self.weekend_booking_mode
        return self.weekday_booking_mode


class SpecialDay(_Frozen):
    id: str
    name: str
    start_date: SpecialDate
    end_date: SpecialDate
    is_recurring: bool = False
    type: SpecialDayType
    # Higher wins when two special days cover the same date; equal priorities fall back to list order
    priority: int = 0

    custom_first_tee: ClockTime | None = None
    custom_last_tee: ClockTime | None = None
    custom_time_periods: bool = False
    time_periods: list[TimePeriod] = []

    booking_mode: BookingMode | None = None


class ScheduleConfig(_Frozen):
    """Everything needed to resolve any date's tee sheet for one course."""

    id: str
    course_id: str

    weekday_first_tee: ClockTime
    weekday_last_tee: ClockTime
    weekday_booking_mode: BookingMode = BookingMode.EIGHTEEN
    weekend_first_tee: ClockTime
    weekend_last_tee: ClockTime
    weekend_booking_mode: BookingMode = BookingMode.EIGHTEEN

    twilight_mode: TwilightMode = TwilightMode.FIXED
    twilight_minutes_before_sunset: int = Field(default=90, ge=0)
    twilight_fixed_default: ClockTime = "16:00"
    club_latitude: float | None = Field(default=None, ge=-90, le=90)
    club_longitude: float | None = Field(default=None, ge=-180, le=180)

    default_booking_window_days: int = Field(default=7, ge=0)

    time_periods: list[TimePeriod] = []
    seasons: list[Season] = []
    special_days: list[SpecialDay] = []

    def hours_for(self, day_type: DayType) -> OperatingHours:
        """Base tee hours and booking mode for a weekday or weekend."""
        if day_type == DayType.WEEKEND:
            return OperatingHours(
                first_tee=self.weekend_first_tee,
                last_tee=self.weekend_last_tee,
                booking_mode=self.weekend_booking_mode,
            )
        return OperatingHours(
            first_tee=self.weekday_first_tee,
            last_tee=self.weekday_last_tee,
            booking_mode=self.weekday_booking_mode,
        )

    @property
    def has_coordinates(self) -> bool:
        return self.club_latitude is not None and self.club_longitude is not None
