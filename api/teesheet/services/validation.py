"""Schedule configuration checks.

Field formats (HH:MM, MM-DD, positive intervals) are enforced by the models.
The rules here look across fields and entries. Each rule returns a
ConfigurationError or None; validate_schedule_config() runs them all and
collects the violations.
"""

from itertools import combinations

from teesheet.models.schedule import DayType, ScheduleConfig, SpecialDay, TimePeriod
from teesheet.services.clock import to_minutes


class ConfigurationError(Exception):
    """Raised when a schedule configuration cannot be used as given."""

    def __init__(self, rule: str, message: str):
        self.rule = rule
        self.message = message
        super().__init__(message)


class SlotLimitExceeded(ConfigurationError):
    """Slot generation hit its safety cap before reaching the last tee."""

    def __init__(self, limit: int, period_name: str, stopped_at: str, last_tee: str):
        self.limit = limit
        self.period_name = period_name
        super().__init__(
            "slot_limit",
            f"Generated {limit} tee times and stopped at {stopped_at} in period '{period_name}' "
            f"before the last tee at {last_tee}. Check that period's interval.",
        )


def validate_schedule_config(config: ScheduleConfig) -> list[ConfigurationError]:
    """Run all configuration rules and return the violations (empty = valid)."""
    violations: list[ConfigurationError] = []

    for kind in DayType:
        v = check_operating_hours(config, kind)
        if v:
            violations.append(v)

    for owner, period in _all_periods(config):
        v = check_period_window(owner, period)
        if v:
            violations.append(v)

    for season in config.seasons:
        if season.override_first_tee and season.override_last_tee:
            v = check_tee_order(f"season '{season.name}'", season.override_first_tee, season.override_last_tee)
            if v:
                violations.append(v)

    for special in config.special_days:
        v = check_special_day_format(special)
        if v:
            violations.append(v)
        if special.custom_first_tee and special.custom_last_tee:
            v = check_tee_order(f"special day '{special.name}'", special.custom_first_tee, special.custom_last_tee)
            if v:
                violations.append(v)

    violations.extend(check_special_day_ambiguity(config.special_days))
    return violations


def _all_periods(config: ScheduleConfig):
    for period in config.time_periods:
        yield "base schedule", period
    for season in config.seasons:
        for period in season.time_periods:
            yield f"season '{season.name}'", period
    for special in config.special_days:
        for period in special.time_periods:
            yield f"special day '{special.name}'", period


def check_tee_order(owner: str, first_tee: str, last_tee: str) -> ConfigurationError | None:
    if to_minutes(first_tee) > to_minutes(last_tee):
        return ConfigurationError(
            "operating_hours",
            f"First tee {first_tee} is after last tee {last_tee} for {owner}.",
        )
    return None


def check_operating_hours(config: ScheduleConfig, kind: DayType) -> ConfigurationError | None:
    """Base first tee must not be after base last tee."""
    hours = config.hours_for(kind)
    return check_tee_order(f"{kind.value.lower()}s", hours.first_tee, hours.last_tee)


def check_period_window(owner: str, period: TimePeriod) -> ConfigurationError | None:
    """A period with an explicit end must end after it starts."""
    if period.end_time is not None and to_minutes(period.end_time) <= to_minutes(period.start_time):
        return ConfigurationError(
            "period_window",
            f"Period '{period.name}' in {owner} ends at {period.end_time}, not after its start {period.start_time}.",
        )
    return None


def check_special_day_format(special: SpecialDay) -> ConfigurationError | None:
    """Recurring days use MM-DD, one-off days use YYYY-MM-DD, for both ends."""
    expected = 5 if special.is_recurring else 10
    if len(special.start_date) != expected or len(special.end_date) != expected:
        fmt = "MM-DD" if special.is_recurring else "YYYY-MM-DD"
        return ConfigurationError(
            "special_day_format",
            f"Special day '{special.name}' must use {fmt} dates, got {special.start_date} to {special.end_date}.",
        )
    return None


def _ranges_overlap(a: SpecialDay, b: SpecialDay) -> bool:
    """Overlap for two special days of the same kind (both recurring or both dated)."""
    def spans(day: SpecialDay) -> list[tuple[str, str]]:
        if day.is_recurring and day.start_date > day.end_date:
            return [(day.start_date, "12-31"), ("01-01", day.end_date)]
        return [(day.start_date, day.end_date)]

    return any(s1 <= e2 and s2 <= e1 for s1, e1 in spans(a) for s2, e2 in spans(b))


def check_special_day_ambiguity(special_days: list[SpecialDay]) -> list[ConfigurationError]:
    """Overlapping special days need different priorities to say which one wins.

    Recurring and one-off days are compared only with their own kind; a
    one-off day overlapping a recurring one is left to list order.
    """
    violations = []
    for a, b in combinations(special_days, 2):
        if a.is_recurring != b.is_recurring or a.priority != b.priority:
            continue
        if _ranges_overlap(a, b):
            violations.append(
                ConfigurationError(
                    "special_day_overlap",
                    f"Special days '{a.name}' and '{b.name}' overlap with the same priority {a.priority}; "
                    f"'{a.name}' wins only because it is listed first.",
                )
            )
    return violations
