"""Effective schedule for a single date.

Layers, in order, each able to overwrite what came before:
base config (weekday/weekend) -> best season -> best special day -> sunset
twilight. The result is a pure function of (config, date).
"""

import logging
from datetime import date

from teesheet.models.schedule import ScheduleConfig, SpecialDayType, TwilightMode
from teesheet.models.tee_sheet import ActiveSeason, ActiveSpecialDay, EffectiveSchedule
from teesheet.services.clock import day_type
from teesheet.services.defaults import default_schedule_config
from teesheet.services.matchers import find_matching_season, find_matching_special_day
from teesheet.services.twilight import twilight_time

logger = logging.getLogger(__name__)


def resolve_effective_schedule(config: ScheduleConfig, query_date: date) -> EffectiveSchedule:
    """Apply season and special-day overrides to the base config for query_date."""
    kind = day_type(query_date)
    base = config.hours_for(kind)

    first_tee = base.first_tee
    last_tee = base.last_tee
    booking_mode = base.booking_mode
    booking_window_days = config.default_booking_window_days
    twilight = config.twilight_fixed_default
    twilight_overridden = False
    time_periods = config.time_periods
    active_season = None
    active_special_day = None
    is_closed = False

    # 1. Season
    season = find_matching_season(config.seasons, query_date)
    if season:
        active_season = ActiveSeason(id=season.id, name=season.name)
        logger.debug("Season %s applies to %s", season.name, query_date)

        if season.override_first_tee:
            first_tee = season.override_first_tee
        if season.override_last_tee:
            last_tee = season.override_last_tee
        if season.override_booking_window is not None:
            booking_window_days = season.override_booking_window
        if season.override_twilight_time:
            twilight = season.override_twilight_time
            twilight_overridden = True
        if season.override_time_periods and season.time_periods:
            time_periods = season.time_periods

        season_mode = season.booking_mode_for(kind)
        if season_mode:
            booking_mode = season_mode

    # 2. Special day (always beats the season)
    special = find_matching_special_day(config.special_days, query_date)
    if special:
        active_special_day = ActiveSpecialDay(id=special.id, name=special.name, type=special.type)
        logger.debug("Special day %s (%s) applies to %s", special.name, special.type.value, query_date)

        if special.type == SpecialDayType.CLOSED:
            is_closed = True
        elif special.type in (SpecialDayType.WEEKEND, SpecialDayType.HOLIDAY):
            # Base weekend hours verbatim, not a season's weekend override
            first_tee = config.weekend_first_tee
            last_tee = config.weekend_last_tee
        elif special.type == SpecialDayType.CUSTOM:
            if special.custom_first_tee:
                first_tee = special.custom_first_tee
            if special.custom_last_tee:
                last_tee = special.custom_last_tee
            if special.custom_time_periods and special.time_periods:
                time_periods = special.time_periods

        if special.booking_mode:
            booking_mode = special.booking_mode

    # 3. Sunset twilight wins over any fixed override when enabled globally
    if twilight_overridden and config.twilight_mode == TwilightMode.SUNSET and config.has_coordinates:
        logger.info(
            "Sunset twilight replaces season override %s for course %s on %s",
            twilight,
            config.course_id,
            query_date,
        )
    twilight = twilight_time(
        config.twilight_mode,
        twilight,
        query_date,
        config.club_latitude,
        config.club_longitude,
        config.twilight_minutes_before_sunset,
    )

    return EffectiveSchedule(
        course_id=config.course_id,
        date=query_date,
        day_type=kind,
        first_tee=first_tee,
        last_tee=last_tee,
        booking_mode=booking_mode,
        twilight_mode=config.twilight_mode,
        twilight_time=twilight,
        booking_window_days=booking_window_days,
        time_periods=[p for p in time_periods if p.applies_to(kind)],
        active_season=active_season,
        active_special_day=active_special_day,
        is_closed=is_closed,
    )


def fallback_effective_schedule(course_id: str, query_date: date) -> EffectiveSchedule:
    """Effective schedule for a course that has never been configured."""
    return resolve_effective_schedule(default_schedule_config(course_id), query_date)
