"""Twilight time for a date.

Pure calculation module. SUNSET mode uses a simple declination / hour-angle
approximation (no equation-of-time or refraction correction). That lands
within a few minutes of the real sunset at mid latitudes, which is plenty
for deciding when twilight rates start.
"""

import math
from datetime import date

from teesheet.models.schedule import TwilightMode
from teesheet.services.clock import MINUTES_PER_DAY, day_of_year, to_clock

AXIAL_TILT_DEGREES = 23.45
# Day of year of the March equinox, where the declination crosses zero
EQUINOX_DAY = 81


def solar_declination(query_date: date) -> float:
    """Approximate solar declination in degrees."""
    return AXIAL_TILT_DEGREES * math.sin(math.radians((360 / 365) * (day_of_year(query_date) - EQUINOX_DAY)))


def sunset_hours(query_date: date, latitude: float, longitude: float) -> float:
    """Approximate sunset as fractional hours of solar time (e.g. 19.75)."""
    lat = math.radians(latitude)
    dec = math.radians(solar_declination(query_date))

    # Clamped so polar day / polar night give 24h / 0h of daylight instead of a domain error
    cos_hour_angle = max(-1.0, min(1.0, -math.tan(lat) * math.tan(dec)))
    hour_angle = math.degrees(math.acos(cos_hour_angle))

    solar_noon = 12 - longitude / 15
    return solar_noon + hour_angle / 15


def twilight_from_sunset(query_date: date, latitude: float, longitude: float, minutes_before_sunset: int) -> str:
    """Sunset minus the configured offset, as "HH:MM" clamped to the same day."""
    minutes = math.floor(sunset_hours(query_date, latitude, longitude) * 60 - minutes_before_sunset)
    return to_clock(max(0, min(MINUTES_PER_DAY - 1, minutes)))


def twilight_time(
    mode: TwilightMode,
    fixed_time: str,
    query_date: date,
    latitude: float | None = None,
    longitude: float | None = None,
    minutes_before_sunset: int = 0,
) -> str:
    """Resolve the twilight start for a date.

    FIXED (or SUNSET without coordinates): the fixed time as given.
    SUNSET with coordinates: the approximated sunset minus the offset.
    """
    if mode == TwilightMode.SUNSET and latitude is not None and longitude is not None:
        return twilight_from_sunset(query_date, latitude, longitude, minutes_before_sunset)
    return fixed_time
