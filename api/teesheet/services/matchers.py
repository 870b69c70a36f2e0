"""Date-range matching for seasons and special days.

Both kinds of range may wrap the year boundary (Nov 1 -> Feb 28). When more
than one rule covers a date the highest priority wins; equal priorities go
to whichever comes first in the configured list.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import TypeVar

from teesheet.models.schedule import Season, SpecialDay

_T = TypeVar("_T", Season, SpecialDay)


def _in_range(value, start, end) -> bool:
    """Inclusive range check that wraps when start > end."""
    if start <= end:
        return start <= value <= end
    return value >= start or value <= end


def season_matches(season: Season, query_date: date) -> bool:
    """Compare month/day as month*100+day, e.g. Dec 25 -> 1225."""
    date_val = query_date.month * 100 + query_date.day
    start_val = season.start_month * 100 + season.start_day
    end_val = season.end_month * 100 + season.end_day
    return _in_range(date_val, start_val, end_val)


def special_day_matches(special_day: SpecialDay, query_date: date) -> bool:
    """Recurring days compare "MM-DD" (wrap aware); dated ones compare "YYYY-MM-DD" (no wrap)."""
    if special_day.is_recurring:
        mmdd = query_date.strftime("%m-%d")
        return _in_range(mmdd, special_day.start_date, special_day.end_date)

    iso = query_date.isoformat()
    return special_day.start_date <= iso <= special_day.end_date


def _best(candidates: Iterable[_T]) -> _T | None:
    best = None
    for candidate in candidates:
        # Strictly greater keeps the earliest entry on ties
        if best is None or candidate.priority > best.priority:
            best = candidate
    return best


def matching_seasons(seasons: Sequence[Season], query_date: date) -> list[Season]:
    return [s for s in seasons if season_matches(s, query_date)]


def matching_special_days(special_days: Sequence[SpecialDay], query_date: date) -> list[SpecialDay]:
    return [d for d in special_days if special_day_matches(d, query_date)]


def find_matching_season(seasons: Sequence[Season], query_date: date) -> Season | None:
    """Highest-priority season covering the date, or None."""
    return _best(matching_seasons(seasons, query_date))


def find_matching_special_day(special_days: Sequence[SpecialDay], query_date: date) -> SpecialDay | None:
    """Highest-priority special day covering the date, or None."""
    return _best(matching_special_days(special_days, query_date))
