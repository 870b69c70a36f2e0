"""Slot generation, previews, and tee-sheet flight tests."""

import logging
from datetime import date

import pytest

from factories import make_booking, make_config, make_period, make_player, make_special_day
from teesheet.models import ExistingBooking, TeeTimeSlot
from teesheet.services.clock import to_minutes
from teesheet.services.defaults import default_schedule_config
from teesheet.services.effective_schedule import resolve_effective_schedule
from teesheet.services.flight_mapper import (
    aggregate_bookings,
    available_flight_id,
    build_tee_sheet,
    map_slots_to_flights,
)
from teesheet.services.slot_generator import (
    build_schedule_preview,
    find_period,
    generate_slots,
    preview_range,
    summarise_slots,
)
from teesheet.services.validation import ConfigurationError, SlotLimitExceeded

TUESDAY = date(2026, 3, 17)
SATURDAY = date(2026, 3, 21)


def _slots(config, query_date=TUESDAY, **options):
    return generate_slots(resolve_effective_schedule(config, query_date), **options)


def _times(slots):
    return [s.time for s in slots]


# ---------------------------------------------------------------------------
# Period lookup
# ---------------------------------------------------------------------------


class TestFindPeriod:
    def test_start_inclusive_end_exclusive(self):
        period = make_period("Prime AM", "07:00", "11:00", 8)
        assert find_period([period], 420, 1020) == period
        assert find_period([period], 659, 1020) == period
        assert find_period([period], 660, 1020) is None
        assert find_period([period], 419, 1020) is None

    def test_open_ended_runs_to_last_tee(self):
        period = make_period("Twilight", "16:00", None, 12)
        assert find_period([period], 1019, 1020) == period
        assert find_period([period], 1020, 1020) is None

    def test_first_in_list_wins(self):
        a = make_period("A", "07:00", "09:00", 8)
        b = make_period("B", "08:00", "10:00", 10)
        assert find_period([a, b], 500, 1020) == a
        assert find_period([b, a], 500, 1020) == b


# ---------------------------------------------------------------------------
# Slot generation
# ---------------------------------------------------------------------------


class TestGenerateSlots:
    def test_prime_am_weekday(self, prime_am_config):
        slots = _slots(prime_am_config)
        times = _times(slots)

        # 06:00-06:50 fallback, 07:00-10:52 every 8, 11:00-17:00 fallback
        assert times[:7] == ["06:00", "06:10", "06:20", "06:30", "06:40", "06:50", "07:00"]
        assert "07:08" in times and "10:52" in times
        assert times[times.index("10:52") + 1] == "11:00"
        assert times[-1] == "17:00"
        assert len(slots) == 73

        by_time = {s.time: s for s in slots}
        assert by_time["06:00"].period_name == "Standard"
        assert by_time["06:00"].interval == 10
        assert by_time["07:08"].period_name == "Prime AM"
        assert by_time["07:08"].is_prime_time is True
        assert by_time["07:08"].interval == 8
        assert by_time["11:00"].is_prime_time is False

        twilight = [s for s in slots if s.is_twilight]
        assert _times(twilight) == ["16:00", "16:10", "16:20", "16:30", "16:40", "16:50", "17:00"]
        assert all(s.period_name == "Twilight" for s in twilight)
        assert sum(1 for s in slots if s.is_prime_time) == 30

    def test_default_weekday(self):
        slots = _slots(default_schedule_config())
        assert len(slots) == 74
        assert _times(slots)[:5] == ["06:00", "06:12", "06:24", "06:36", "06:48"]
        # The open-ended Twilight period stops short of last tee; 17:00 uses the fallback step
        assert slots[-1].time == "17:00"
        assert slots[-1].interval == 10
        assert slots[-1].period_name == "Twilight"

    def test_weekend_starts_earlier(self):
        slots = _slots(default_schedule_config(), SATURDAY)
        assert slots[0].time == "05:30"
        assert slots[0].period_name == "Standard"
        assert "06:00" in _times(slots)
        assert slots[-1].time <= "17:30"

    def test_first_slot_at_first_tee_and_strictly_increasing(self, prime_am_config):
        for config in (prime_am_config, default_schedule_config()):
            for query_date in (TUESDAY, SATURDAY):
                effective = resolve_effective_schedule(config, query_date)
                minutes = [to_minutes(t) for t in _times(generate_slots(effective))]
                assert minutes[0] == to_minutes(effective.first_tee)
                assert minutes[-1] <= to_minutes(effective.last_tee)
                assert all(a < b for a, b in zip(minutes, minutes[1:]))

    def test_twilight_suppresses_prime(self):
        late_prime = make_period("Late Prime", "15:00", "17:00", 30, prime=True)
        slots = _slots(make_config(time_periods=[late_prime]))
        by_time = {s.time: s for s in slots}

        assert by_time["15:30"].is_prime_time is True
        assert by_time["15:30"].period_name == "Late Prime"
        assert by_time["16:00"].is_prime_time is False
        assert by_time["16:00"].is_twilight is True
        assert by_time["16:00"].period_name == "Twilight"
        # Still steps at the period's own interval
        assert by_time["16:00"].interval == 30
        assert not any(s.is_prime_time and s.is_twilight for s in slots)

    def test_interval_can_overshoot_period_end(self):
        short = make_period("Short", "06:00", "06:25", 20)
        times = _times(_slots(make_config(time_periods=[short])))
        assert times[:4] == ["06:00", "06:20", "06:40", "06:50"]

    def test_sort_order_decides_overlaps(self):
        broad = make_period("Broad", "07:00", "11:00", 8, sort_order=1)
        narrow = make_period("Narrow", "07:00", "09:00", 15, sort_order=0)
        slots = _slots(make_config(time_periods=[broad, narrow]))
        by_time = {s.time: s for s in slots}

        assert by_time["07:15"].period_name == "Narrow"
        assert "07:08" not in by_time
        assert by_time["09:00"].period_name == "Broad"
        assert "09:08" in by_time

    def test_closed_day_has_no_slots(self, prime_am_config):
        closed = make_special_day("Maintenance", "2026-03-17", "2026-03-17", type="CLOSED")
        config = prime_am_config.model_copy(update={"special_days": [closed]})
        assert _slots(config) == []

    def test_fallback_interval_option(self):
        slots = _slots(make_config(weekday_last_tee="07:00"), fallback_interval=15)
        assert _times(slots) == ["06:00", "06:15", "06:30", "06:45", "07:00"]

    def test_first_tee_equals_last_tee(self):
        slots = _slots(make_config(weekday_first_tee="08:00", weekday_last_tee="08:00"))
        assert _times(slots) == ["08:00"]

    def test_deterministic(self, prime_am_config):
        assert _slots(prime_am_config) == _slots(prime_am_config)


class TestSlotCap:
    def test_strict_cap_names_the_period(self):
        every_minute = make_period("Every Minute", "06:00", None, 1)
        with pytest.raises(SlotLimitExceeded) as exc_info:
            _slots(make_config(time_periods=[every_minute]))

        exc = exc_info.value
        assert isinstance(exc, ConfigurationError)
        assert exc.rule == "slot_limit"
        assert exc.period_name == "Every Minute"
        assert exc.limit == 200
        assert "09:20" in exc.message

    def test_lenient_cap_truncates(self, caplog):
        every_minute = make_period("Every Minute", "06:00", None, 1)
        with caplog.at_level(logging.WARNING, logger="teesheet.services.slot_generator"):
            slots = _slots(make_config(time_periods=[every_minute]), strict=False)

        assert len(slots) == 200
        assert slots[-1].time == "09:19"
        assert "Slot cap 200 reached" in caplog.text

    def test_exactly_at_cap_is_fine(self):
        every_minute = make_period("Every Minute", "06:00", None, 1)
        slots = _slots(make_config(weekday_last_tee="09:19", time_periods=[every_minute]))
        assert len(slots) == 200

    def test_custom_cap(self, prime_am_config):
        with pytest.raises(SlotLimitExceeded) as exc_info:
            _slots(prime_am_config, max_slots=3)
        assert exc_info.value.period_name == "Standard"
        assert len(_slots(prime_am_config, max_slots=3, strict=False)) == 3


# ---------------------------------------------------------------------------
# Summary and preview
# ---------------------------------------------------------------------------


def _slot(time, prime=False, twilight=False):
    return TeeTimeSlot(time=time, period_name="P", interval=10, is_prime_time=prime, is_twilight=twilight)


class TestSummary:
    def test_empty(self):
        summary = summarise_slots([])
        assert summary.total_slots == 0
        assert summary.max_players == 0
        assert summary.prime_time_percentage == 0

    def test_counts(self):
        summary = summarise_slots([_slot("07:00", prime=True), _slot("07:10"), _slot("07:20")])
        assert summary.total_slots == 3
        assert summary.max_players == 12
        assert summary.prime_time_slots == 1
        assert summary.prime_time_percentage == 33

    def test_percentage_rounds_half_up(self):
        slots = [_slot("07:00", prime=True)] + [_slot(f"08:{m:02d}") for m in range(0, 70, 10)]
        # 1 of 8 = 12.5%
        assert summarise_slots(slots).prime_time_percentage == 13

    def test_players_per_flight(self):
        assert summarise_slots([_slot("07:00")], players_per_flight=3).max_players == 3


class TestPreview:
    def test_prime_am_preview(self, prime_am_config):
        preview = build_schedule_preview(prime_am_config, TUESDAY)
        assert preview.date == TUESDAY
        assert preview.operating_hours.first_tee == "06:00"
        assert preview.operating_hours.last_tee == "17:00"
        assert preview.twilight_time == "16:00"
        assert preview.is_closed is False
        assert preview.summary.total_slots == 73
        assert preview.summary.prime_time_slots == 30
        assert preview.summary.prime_time_percentage == 41
        assert preview.summary.max_players == 292

    def test_default_preview(self):
        summary = build_schedule_preview(default_schedule_config(), TUESDAY).summary
        assert summary.total_slots == 74
        assert summary.prime_time_slots == 45
        assert summary.prime_time_percentage == 61
        assert summary.max_players == 296

    def test_closed_preview(self):
        christmas = make_special_day("Christmas", "12-25", "12-25", type="CLOSED", recurring=True)
        preview = build_schedule_preview(make_config(special_days=[christmas]), date(2025, 12, 25))
        assert preview.is_closed is True
        assert preview.tee_time_slots == []
        assert preview.summary.total_slots == 0
        assert preview.active_special_day.name == "Christmas"

    def test_options_pass_through(self, prime_am_config):
        preview = build_schedule_preview(prime_am_config, TUESDAY, players_per_flight=2, fallback_interval=20)
        assert preview.tee_time_slots[1].time == "06:20"
        assert preview.summary.max_players == preview.summary.total_slots * 2


class TestPreviewRange:
    def test_week(self):
        previews = preview_range(default_schedule_config(), date(2026, 3, 16), date(2026, 3, 22))
        assert [p.date for p in previews] == [date(2026, 3, d) for d in range(16, 23)]
        assert [p.day_type.value for p in previews] == ["WEEKDAY"] * 5 + ["WEEKEND"] * 2

    def test_single_day(self):
        assert len(preview_range(default_schedule_config(), TUESDAY, TUESDAY)) == 1

    def test_reversed_range(self):
        with pytest.raises(ValueError):
            preview_range(default_schedule_config(), SATURDAY, TUESDAY)

    def test_too_many_days(self):
        with pytest.raises(ValueError):
            preview_range(default_schedule_config(), date(2026, 3, 1), date(2026, 4, 1))
        assert len(preview_range(default_schedule_config(), date(2026, 3, 1), date(2026, 3, 31))) == 31

    def test_max_days_option(self):
        with pytest.raises(ValueError):
            preview_range(default_schedule_config(), TUESDAY, SATURDAY, max_days=3)


# ---------------------------------------------------------------------------
# Flights
# ---------------------------------------------------------------------------


def _existing(bid, tee_time, players=(), **extra):
    return ExistingBooking(id=bid, tee_time=tee_time, status="booked", players=list(players), **extra)


class TestMapSlotsToFlights:
    def test_available_flights(self):
        slots = [_slot("07:00"), _slot("07:08", prime=True)]
        flights = map_slots_to_flights(slots, TUESDAY, "course-1")

        assert [f.id for f in flights] == ["flight-2026-03-17-0700", "flight-2026-03-17-0708"]
        assert flights[1].time == "7:08 AM"
        assert flights[1].tee_time == "07:08"
        assert flights[1].status == "available"
        assert flights[1].players == [None, None, None, None]
        assert flights[1].is_prime_time is True
        assert flights[1].course_id == "course-1"

    def test_booking_fills_its_slot(self):
        alice = make_player("p1", "Alice")
        slots = [_slot("07:00"), _slot("07:08")]
        booking = _existing("b1", "07:08", [alice], notes="Society", holes=9)
        flights = map_slots_to_flights(slots, TUESDAY, "course-1", [booking])

        assert flights[0].status == "available"
        assert flights[1].id == "b1"
        assert flights[1].status == "booked"
        assert flights[1].players == [alice]
        assert flights[1].notes == "Society"
        assert flights[1].holes == 9

    def test_first_duplicate_wins(self):
        first = _existing("b1", "07:00")
        second = _existing("b2", "07:00")
        flights = map_slots_to_flights([_slot("07:00")], TUESDAY, "course-1", [first, second])
        assert flights[0].id == "b1"

    def test_unmatched_booking_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="teesheet.services.flight_mapper"):
            flights = map_slots_to_flights([_slot("07:00")], TUESDAY, "course-1", [_existing("b1", "07:05")])
        assert len(flights) == 1
        assert flights[0].status == "available"
        assert "07:05" in caplog.text

    def test_seats(self):
        flights = map_slots_to_flights([_slot("07:00")], TUESDAY, "course-1", seats=2)
        assert flights[0].players == [None, None]

    def test_flight_id_format(self):
        assert available_flight_id(date(2026, 1, 5), "16:48") == "flight-2026-01-05-1648"


class TestAggregateBookings:
    def test_crossover_pair_merges(self):
        alice = make_player("p1", "Alice", member_uuid="u-1", member_id="M100")
        bob = make_player("p2", "Bob")
        carol = make_player("p3", "Carol")
        rows = [
            make_booking("b2", "07:08", [carol], starting_hole=10, notes="Back nine"),
            make_booking("b1", "07:08", [alice, bob], notes="Front nine"),
        ]
        merged = aggregate_bookings(rows)

        assert len(merged) == 1
        entry = merged[0]
        # Hole-1 booking leads even when listed second
        assert entry.id == "b1"
        assert entry.notes == "Front nine"
        assert [p.id for p in entry.players] == ["p1", "p2", "p3"]
        assert [(g.id, g.group_number) for g in entry.booking_groups] == [("b1", 1), ("b2", 2)]
        assert entry.booking_groups[0].booked_by.id == "u-1"
        assert entry.booking_groups[0].booked_by.member_id == "M100"
        assert entry.booking_groups[0].player_ids == ["p1", "p2"]
        assert entry.booking_groups[1].booked_by.name == "Carol"

    def test_row_order_does_not_change_groups(self):
        front = make_booking("front", "07:08", [make_player("p1", "Alice")], starting_hole=1)
        back = make_booking("back", "07:08", [make_player("p2", "Bob")], starting_hole=10)
        assert aggregate_bookings([front, back]) == aggregate_bookings([back, front])
        assert [g.id for g in aggregate_bookings([back, front])[0].booking_groups] == ["front", "back"]

    def test_cancelled_rows_skipped(self):
        rows = [
            make_booking("b1", "07:00", [make_player("p1", "Alice")], status="CANCELLED"),
            make_booking("b2", "07:16", [make_player("p2", "Bob")]),
        ]
        merged = aggregate_bookings(rows)
        assert [m.tee_time for m in merged] == ["07:16"]

    def test_sorted_by_tee_time(self):
        rows = [make_booking("late", "09:00"), make_booking("early", "07:00")]
        assert [m.id for m in aggregate_bookings(rows)] == ["early", "late"]

    def test_booking_without_players(self):
        merged = aggregate_bookings([make_booking("b1", "07:00")])
        booked_by = merged[0].booking_groups[0].booked_by
        assert booked_by.name == "Unknown"
        assert booked_by.id == ""

    def test_more_than_two_at_one_time(self, caplog):
        rows = [make_booking(f"b{i}", "07:00", [make_player(f"p{i}", f"P{i}")]) for i in range(3)]
        with caplog.at_level(logging.WARNING, logger="teesheet.services.flight_mapper"):
            merged = aggregate_bookings(rows)
        assert [g.group_number for g in merged[0].booking_groups] == [1, 2, 3]
        assert len(merged[0].players) == 3
        assert "3 bookings share tee time 07:00" in caplog.text

    def test_empty(self):
        assert aggregate_bookings([]) == []


class TestBuildTeeSheet:
    def test_default_sheet_with_bookings(self):
        rows = [
            make_booking("b1", "07:08", [make_player("p1", "Alice")]),
            make_booking("b2", "07:08", [make_player("p2", "Bob")], starting_hole=10),
        ]
        flights = build_tee_sheet(default_schedule_config("course-7"), TUESDAY, rows)

        assert len(flights) == 74
        booked = {f.tee_time: f for f in flights if f.status != "available"}
        assert list(booked) == ["07:08"]
        assert booked["07:08"].id == "b1"
        assert booked["07:08"].period_name == "Prime AM"
        assert len(booked["07:08"].booking_groups) == 2
        assert all(f.course_id == "course-7" for f in flights)

    def test_closed_day_is_empty(self):
        closed = make_special_day("Closed", "2026-03-17", "2026-03-17", type="CLOSED")
        assert build_tee_sheet(make_config(special_days=[closed]), TUESDAY) == []

    def test_players_per_flight(self, prime_am_config):
        flights = build_tee_sheet(prime_am_config, TUESDAY, players_per_flight=3)
        assert flights[0].players == [None, None, None]
