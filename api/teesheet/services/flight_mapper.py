"""Overlay existing bookings onto generated tee times.

One flight per slot, matched on the exact "HH:MM" tee time. No conflict
detection happens here; allocation belongs to the booking engine. Crossover
(CROSS) bookings arrive as booking groups and pass straight through.
"""

import logging
from datetime import date

from teesheet.models.schedule import ScheduleConfig
from teesheet.models.tee_sheet import (
    BookedBy,
    BookingGroup,
    ExistingBooking,
    Flight,
    TeeTimeBooking,
    TeeTimeSlot,
)
from teesheet.services.clock import format_display_time
from teesheet.services.slot_generator import PLAYERS_PER_FLIGHT, build_schedule_preview

logger = logging.getLogger(__name__)

STATUS_AVAILABLE = "available"
STATUS_CANCELLED = "cancelled"


def available_flight_id(query_date: date, tee_time: str) -> str:
    """e.g. flight-2026-03-17-0708"""
    return f"flight-{query_date.isoformat()}-{tee_time.replace(':', '')}"


def map_slots_to_flights(
    slots: list[TeeTimeSlot],
    query_date: date,
    course_id: str,
    existing_bookings: list[ExistingBooking] | None = None,
    *,
    seats: int = PLAYERS_PER_FLIGHT,
) -> list[Flight]:
    """Turn slots into tee-sheet flights, filling in any booking at the same time."""
    by_time: dict[str, ExistingBooking] = {}
    for booking in existing_bookings or []:
        # First booking listed for a time wins, later duplicates are ignored
        by_time.setdefault(booking.tee_time, booking)

    flights = []
    for slot in slots:
        booking = by_time.get(slot.time)
        if booking:
            flights.append(
                Flight(
                    id=booking.id,
                    time=format_display_time(slot.time),
                    tee_time=slot.time,
                    date=query_date,
                    status=booking.status,
                    players=list(booking.players),
                    course_id=course_id,
                    blocked_reason=booking.blocked_reason,
                    notes=booking.notes,
                    holes=booking.holes,
                    is_prime_time=slot.is_prime_time,
                    is_twilight=slot.is_twilight,
                    period_name=slot.period_name,
                    booking_groups=booking.booking_groups,
                )
            )
        else:
            flights.append(
                Flight(
                    id=available_flight_id(query_date, slot.time),
                    time=format_display_time(slot.time),
                    tee_time=slot.time,
                    date=query_date,
                    status=STATUS_AVAILABLE,
                    players=[None] * seats,
                    course_id=course_id,
                    is_prime_time=slot.is_prime_time,
                    is_twilight=slot.is_twilight,
                    period_name=slot.period_name,
                )
            )

    unmatched = set(by_time) - {s.time for s in slots}
    if unmatched:
        logger.warning(
            "Bookings at %s on %s do not line up with any generated tee time",
            ", ".join(sorted(unmatched)),
            query_date,
        )
    return flights


def _booked_by(row: TeeTimeBooking) -> BookedBy:
    """The first player stands in for the booker; it is not tracked separately."""
    if not row.players:
        return BookedBy(id="", name="Unknown")
    first = row.players[0]
    return BookedBy(id=first.member_uuid or first.id, name=first.name or "Unknown", member_id=first.member_id)


def aggregate_bookings(rows: list[TeeTimeBooking]) -> list[ExistingBooking]:
    """Merge booking rows that share a tee time into one entry per time.

    Cancelled rows are dropped. Rows at one time are ordered by starting
    hole, so the hole-1 booking supplies id, status and notes. Players from
    all rows are concatenated and each row becomes a numbered booking group.
    """
    grouped: dict[str, list[TeeTimeBooking]] = {}
    # Hole-1 start is group 1, its hole-10 crossover partner group 2
    for row in sorted(rows, key=lambda r: (r.tee_time, r.starting_hole)):
        if row.status.lower() == STATUS_CANCELLED:
            continue
        grouped.setdefault(row.tee_time, []).append(row)

    merged = []
    for tee_time, same_time in grouped.items():
        if len(same_time) > 2:
            logger.warning("%d bookings share tee time %s; crossover expects at most two", len(same_time), tee_time)

        first = same_time[0]
        merged.append(
            ExistingBooking(
                id=first.id,
                tee_time=tee_time,
                status=first.status,
                players=[p for row in same_time for p in row.players],
                notes=first.notes,
                holes=first.holes,
                booking_groups=[
                    BookingGroup(
                        id=row.id,
                        group_number=index + 1,
                        booked_by=_booked_by(row),
                        player_ids=[p.id for p in row.players],
                    )
                    for index, row in enumerate(same_time)
                ],
            )
        )
    return merged


def build_tee_sheet(
    config: ScheduleConfig,
    query_date: date,
    rows: list[TeeTimeBooking] | None = None,
    **preview_options,
) -> list[Flight]:
    """Flights for a date: resolve, generate, merge same-time bookings, overlay."""
    preview = build_schedule_preview(config, query_date, **preview_options)
    return map_slots_to_flights(
        preview.tee_time_slots,
        query_date,
        config.course_id,
        aggregate_bookings(rows or []),
        seats=preview_options.get("players_per_flight", PLAYERS_PER_FLIGHT),
    )
