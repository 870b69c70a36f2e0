"""Resolved schedule, generated slots, and tee-sheet flights.

EffectiveSchedule is derived per (config, date) and never stored.
Booking and player data belong to the booking subsystem; they only pass
through here on their way onto the grid.
"""

from datetime import date
from typing import Literal

from pydantic import Field

from teesheet.models.schedule import BookingMode, DayType, SpecialDayType, TimePeriod, TwilightMode, _Frozen

# --- Effective schedule ---


class ActiveSeason(_Frozen):
    id: str
    name: str


class ActiveSpecialDay(_Frozen):
    id: str
    name: str
    type: SpecialDayType


class EffectiveSchedule(_Frozen):
    course_id: str
    date: date
    day_type: DayType

    # Operating hours for this date
    first_tee: str
    last_tee: str

    booking_mode: BookingMode

    # Twilight
    twilight_mode: TwilightMode
    twilight_time: str

    booking_window_days: int

    # Already filtered to the date's day type
    time_periods: list[TimePeriod]

    active_season: ActiveSeason | None = None
    active_special_day: ActiveSpecialDay | None = None

    is_closed: bool = False


# --- Slots ---


class TeeTimeSlot(_Frozen):
    time: str  # "HH:MM"
    period_name: str
    interval: int
    is_prime_time: bool
    is_twilight: bool


class SlotSummary(_Frozen):
    total_slots: int = 0
    max_players: int = 0
    prime_time_slots: int = 0
    prime_time_percentage: int = 0


class OperatingWindow(_Frozen):
    first_tee: str
    last_tee: str


class SchedulePreview(_Frozen):
    date: date
    day_type: DayType
    booking_mode: BookingMode
    operating_hours: OperatingWindow
    twilight_time: str
    tee_time_slots: list[TeeTimeSlot]
    active_season: ActiveSeason | None = None
    active_special_day: ActiveSpecialDay | None = None
    is_closed: bool
    summary: SlotSummary


# --- Bookings and flights ---


class Player(_Frozen):
    id: str
    name: str
    type: str  # member, guest, dependent, walkup
    member_id: str | None = None  # club membership number
    member_uuid: str | None = None
    booking_id: str | None = None
    handicap: float | None = None
    checked_in: bool | None = None
    has_cart: bool | None = None
    has_caddy: bool | None = None
    cart_shared_with: int | None = None
    cart_status: str | None = None
    caddy_status: str | None = None
    cart_request: str | None = None
    caddy_request: str | None = None
    rental_request: str | None = None


class BookedBy(_Frozen):
    id: str
    name: str
    member_id: str | None = None


class BookingGroup(_Frozen):
    """One of up to two bookings sharing a tee time (crossover mode)."""

    id: str
    group_number: int = Field(ge=1)  # 1 = first booking at the time, 2 = crossover partner
    booked_by: BookedBy
    player_ids: list[str]


class ExistingBooking(_Frozen):
    """A reservation already on the sheet, keyed by tee time."""

    id: str
    tee_time: str
    status: str
    players: list[Player | None]
    blocked_reason: str | None = None
    notes: str | None = None
    holes: Literal[9, 18] | None = None
    booking_groups: list[BookingGroup] | None = None


class TeeTimeBooking(_Frozen):
    """A single persisted booking row, before same-time rows are merged."""

    id: str
    tee_time: str
    status: str
    starting_hole: Literal[1, 10] = 1
    holes: Literal[9, 18] | None = None
    notes: str | None = None
    players: list[Player] = []


class Flight(_Frozen):
    id: str
    time: str  # display, e.g. "7:08 AM"
    tee_time: str  # "HH:MM"
    date: date
    status: str
    players: list[Player | None]
    course_id: str
    blocked_reason: str | None = None
    notes: str | None = None
    holes: Literal[9, 18] | None = None
    is_prime_time: bool
    is_twilight: bool
    period_name: str
    booking_groups: list[BookingGroup] | None = None
