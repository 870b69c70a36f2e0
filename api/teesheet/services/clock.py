"""Wall-clock helpers shared by the schedule services.

Times travel as "HH:MM" strings (24-hour, facility local time) and are
compared as minutes since midnight.
"""

from datetime import date

from teesheet.models.schedule import DayType

MINUTES_PER_DAY = 24 * 60


def to_minutes(clock: str) -> int:
    """Minutes since midnight for an "HH:MM" string.

    Missing or non-numeric parts count as 0: "07" -> 420, "" -> 0.
    Configuration is validated on the way in, so this stays lenient.
    """
    parts = clock.split(":")
    hours = _int_or_zero(parts[0]) if len(parts) > 0 else 0
    minutes = _int_or_zero(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def _int_or_zero(part: str) -> int:
    try:
        return int(part)
    except ValueError:
        return 0


def to_clock(minutes: int) -> str:
    """Format minutes since midnight as zero-padded "HH:MM"."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def format_display_time(clock: str) -> str:
    """12-hour display form used on the tee sheet.

    "06:00" -> "6:00 AM", "12:08" -> "12:08 PM", "00:30" -> "12:30 AM"
    """
    parts = clock.split(":")
    hour = _int_or_zero(parts[0])
    minutes = parts[1] if len(parts) > 1 else "00"
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour - 12 if hour > 12 else (12 if hour == 0 else hour)
    return f"{display_hour}:{minutes.zfill(2)} {suffix}"


def day_type(query_date: date) -> DayType:
    """Saturday and Sunday are weekend days."""
    return DayType.WEEKEND if query_date.weekday() >= 5 else DayType.WEEKDAY


def day_of_year(query_date: date) -> int:
    """1 for January 1st."""
    return query_date.timetuple().tm_yday
