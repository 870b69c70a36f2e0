"""Tee-time slot generation for a resolved schedule.

Pure calculation module: no storage, no async, no FastAPI dependencies.
Walks the operating window from first to last tee, stepping by whichever
time period covers the current minute, and tags each slot as prime,
standard, or twilight.
"""

import logging
import math
from datetime import date, timedelta

from teesheet.models.schedule import ScheduleConfig, TimePeriod
from teesheet.models.tee_sheet import (
    EffectiveSchedule,
    OperatingWindow,
    SchedulePreview,
    SlotSummary,
    TeeTimeSlot,
)
from teesheet.services.clock import to_clock, to_minutes
from teesheet.services.effective_schedule import resolve_effective_schedule
from teesheet.services.validation import SlotLimitExceeded

logger = logging.getLogger(__name__)

MAX_SLOTS = 200  # safety cap per day
FALLBACK_INTERVAL_MINUTES = 10
FALLBACK_PERIOD_NAME = "Standard"
TWILIGHT_PERIOD_NAME = "Twilight"
PLAYERS_PER_FLIGHT = 4
MAX_PREVIEW_DAYS = 31


def find_period(periods: list[TimePeriod], minute: int, last_tee: int) -> TimePeriod | None:
    """First period (in the given order) whose [start, end) contains minute.

    A period without an end time runs until the last tee.
    """
    for period in periods:
        start = to_minutes(period.start_time)
        end = to_minutes(period.end_time) if period.end_time else last_tee
        if start <= minute < end:
            return period
    return None


def generate_slots(
    schedule: EffectiveSchedule,
    *,
    max_slots: int = MAX_SLOTS,
    fallback_interval: int = FALLBACK_INTERVAL_MINUTES,
    strict: bool = True,
) -> list[TeeTimeSlot]:
    """Generate the ordered tee times for a resolved schedule.

    Closed days yield no slots. If the cap is reached before the last tee,
    strict mode raises SlotLimitExceeded naming the period in effect;
    otherwise the list is cut short and a warning is logged.
    """
    if schedule.is_closed:
        return []

    periods = sorted(schedule.time_periods, key=lambda p: p.sort_order)
    twilight = to_minutes(schedule.twilight_time)
    last_tee = to_minutes(schedule.last_tee)
    current = to_minutes(schedule.first_tee)

    slots: list[TeeTimeSlot] = []
    while current <= last_tee:
        period = find_period(periods, current, last_tee)

        if len(slots) >= max_slots:
            period_name = period.name if period else FALLBACK_PERIOD_NAME
            if strict:
                raise SlotLimitExceeded(max_slots, period_name, to_clock(current), schedule.last_tee)
            logger.warning(
                "Slot cap %d reached at %s (%s) for course %s on %s; remaining tee times dropped",
                max_slots,
                to_clock(current),
                period_name,
                schedule.course_id,
                schedule.date,
            )
            break

        is_twilight = current >= twilight
        interval = period.interval_minutes if period else fallback_interval
        is_prime = period.is_prime_time if period else False

        slots.append(
            TeeTimeSlot(
                time=to_clock(current),
                period_name=TWILIGHT_PERIOD_NAME if is_twilight else (period.name if period else FALLBACK_PERIOD_NAME),
                interval=interval,
                is_prime_time=is_prime and not is_twilight,
                is_twilight=is_twilight,
            )
        )
        current += interval

    return slots


def summarise_slots(slots: list[TeeTimeSlot], players_per_flight: int = PLAYERS_PER_FLIGHT) -> SlotSummary:
    """Totals for the preview panel. Percentage is rounded half up."""
    total = len(slots)
    if total == 0:
        return SlotSummary()

    prime = sum(1 for s in slots if s.is_prime_time)
    return SlotSummary(
        total_slots=total,
        max_players=total * players_per_flight,
        prime_time_slots=prime,
        prime_time_percentage=math.floor(prime * 100 / total + 0.5),
    )


def build_schedule_preview(
    config: ScheduleConfig,
    query_date: date,
    *,
    players_per_flight: int = PLAYERS_PER_FLIGHT,
    **slot_options,
) -> SchedulePreview:
    """Resolve the date, generate its slots, and bundle them with a summary."""
    effective = resolve_effective_schedule(config, query_date)
    slots = generate_slots(effective, **slot_options)

    return SchedulePreview(
        date=effective.date,
        day_type=effective.day_type,
        booking_mode=effective.booking_mode,
        operating_hours=OperatingWindow(first_tee=effective.first_tee, last_tee=effective.last_tee),
        twilight_time=effective.twilight_time,
        tee_time_slots=slots,
        active_season=effective.active_season,
        active_special_day=effective.active_special_day,
        is_closed=effective.is_closed,
        summary=summarise_slots(slots, players_per_flight),
    )


def preview_range(
    config: ScheduleConfig,
    start_date: date,
    end_date: date,
    *,
    max_days: int = MAX_PREVIEW_DAYS,
    **preview_options,
) -> list[SchedulePreview]:
    """One preview per day from start_date to end_date inclusive (week and month views)."""
    if end_date < start_date:
        raise ValueError(f"End date {end_date} is before start date {start_date}.")
    days = (end_date - start_date).days + 1
    if days > max_days:
        raise ValueError(f"Cannot preview more than {max_days} days at once (asked for {days}).")

    return [build_schedule_preview(config, start_date + timedelta(days=i), **preview_options) for i in range(days)]
