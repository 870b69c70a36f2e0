"""Tee-sheet route: generated tee times with existing bookings laid over them."""

import logging

from fastapi import APIRouter, Depends

from teesheet.core.dependencies import get_default_config, get_slot_options
from teesheet.models import Flight, ScheduleConfig
from teesheet.routes.schedule import config_error
from teesheet.schemas import TeeSheetQuery
from teesheet.services.flight_mapper import build_tee_sheet
from teesheet.services.validation import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tee-sheet", tags=["tee-sheet"])


@router.post("", response_model=list[Flight])
async def get_tee_sheet(
    body: TeeSheetQuery,
    default_config: ScheduleConfig = Depends(get_default_config),
    slot_options: dict = Depends(get_slot_options),
):
    """Return one flight per tee time for the date.

    Bookings at the same tee time are merged into booking groups; times
    without a booking come back as available with empty seats.
    """
    config = body.config or default_config
    try:
        flights = build_tee_sheet(config, body.date, body.bookings, **slot_options)
    except ConfigurationError as exc:
        raise config_error(exc)

    logger.info(
        "Tee sheet for course %s on %s: %d flights, %d bookings",
        config.course_id,
        body.date,
        len(flights),
        len(body.bookings),
    )
    return flights
