"""Baked-in schedule used until a course configures its own.

Factories rather than module constants: every call returns fresh values, and
callers (tests, the API dependency) can swap in their own.
"""

from teesheet.models.schedule import ApplicableDays, BookingMode, ScheduleConfig, TimePeriod, TwilightMode

DEFAULT_CONFIG_ID = "default"

# (name, start, end, interval, prime)
_DEFAULT_PERIODS = [
    ("Early Bird", "06:00", "07:00", 12, False),
    ("Prime AM", "07:00", "11:00", 8, True),
    ("Midday", "11:00", "14:00", 10, False),
    ("Prime PM", "14:00", "16:00", 8, True),
    ("Twilight", "16:00", None, 12, False),
]


def default_time_periods() -> list[TimePeriod]:
    """Five periods from 06:00 to close, alternating prime and non-prime."""
    return [
        TimePeriod(
            id=f"default-{i}",
            name=name,
            start_time=start,
            end_time=end,
            interval_minutes=interval,
            is_prime_time=prime,
            applicable_days=ApplicableDays.ALL,
            sort_order=i,
        )
        for i, (name, start, end, interval, prime) in enumerate(_DEFAULT_PERIODS)
    ]


def default_schedule_config(course_id: str = "default") -> ScheduleConfig:
    return ScheduleConfig(
        id=DEFAULT_CONFIG_ID,
        course_id=course_id,
        weekday_first_tee="06:00",
        weekday_last_tee="17:00",
        weekday_booking_mode=BookingMode.EIGHTEEN,
        weekend_first_tee="05:30",
        weekend_last_tee="17:30",
        weekend_booking_mode=BookingMode.EIGHTEEN,
        twilight_mode=TwilightMode.FIXED,
        twilight_minutes_before_sunset=90,
        twilight_fixed_default="16:00",
        default_booking_window_days=7,
        time_periods=default_time_periods(),
        seasons=[],
        special_days=[],
    )
