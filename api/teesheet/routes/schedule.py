"""Schedule routes: defaults, effective schedule, slot previews, validation.

Stateless: the caller sends the config snapshot with each request.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from teesheet.core.config import settings
from teesheet.core.dependencies import get_default_config, get_slot_options
from teesheet.models import EffectiveSchedule, ScheduleConfig, SchedulePreview
from teesheet.schemas import ScheduleQuery, ScheduleRangeQuery, ValidateRequest, ValidationReport, ViolationOut
from teesheet.services.effective_schedule import resolve_effective_schedule
from teesheet.services.slot_generator import build_schedule_preview, preview_range
from teesheet.services.validation import ConfigurationError, validate_schedule_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["schedule"])


def config_error(exc: ConfigurationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=[{"rule": exc.rule, "message": exc.message}],
    )


@router.get("/defaults", response_model=ScheduleConfig)
async def get_defaults(default_config: ScheduleConfig = Depends(get_default_config)):
    """The schedule a course gets before anyone configures it."""
    return default_config


@router.post("/effective", response_model=EffectiveSchedule)
async def get_effective_schedule(
    body: ScheduleQuery,
    default_config: ScheduleConfig = Depends(get_default_config),
):
    config = body.config or default_config
    return resolve_effective_schedule(config, body.date)


@router.post("/preview", response_model=SchedulePreview)
async def get_schedule_preview(
    body: ScheduleQuery,
    default_config: ScheduleConfig = Depends(get_default_config),
    slot_options: dict = Depends(get_slot_options),
):
    """Tee times and summary for one date, as shown in the schedule preview."""
    config = body.config or default_config
    try:
        preview = build_schedule_preview(config, body.date, **slot_options)
    except ConfigurationError as exc:
        logger.info("Preview for course %s on %s rejected: %s", config.course_id, body.date, exc.message)
        raise config_error(exc)
    return preview


@router.post("/preview/range", response_model=list[SchedulePreview])
async def get_schedule_preview_range(
    body: ScheduleRangeQuery,
    default_config: ScheduleConfig = Depends(get_default_config),
    slot_options: dict = Depends(get_slot_options),
):
    """One preview per day, for week and month views."""
    config = body.config or default_config
    try:
        return preview_range(
            config,
            body.start_date,
            body.end_date,
            max_days=settings.max_preview_days,
            **slot_options,
        )
    except ConfigurationError as exc:
        raise config_error(exc)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/validate", response_model=ValidationReport)
async def validate_config(body: ValidateRequest):
    """Report every cross-field problem in a config without generating anything."""
    violations = validate_schedule_config(body.config)
    return ValidationReport(
        valid=not violations,
        violations=[ViolationOut(rule=v.rule, message=v.message) for v in violations],
    )
