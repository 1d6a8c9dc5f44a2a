import logging
import random
from functools import lru_cache

from fastapi import HTTPException, status

from timesheet_generator.core.config import settings
from timesheet_generator.core.date_filters import resolve_period
from timesheet_generator.core.generator import GenerationPolicy
from timesheet_generator.core.reference_data import (
    DEFAULT_REFERENCE_DATA,
    Employee,
    ReferenceData,
    load_reference_data,
)

logger = logging.getLogger(__name__)

# Process-wide random source; seeded only when RANDOM_SEED is set
_rng = random.Random(settings.RANDOM_SEED)


def get_policy() -> GenerationPolicy:
    return GenerationPolicy(
        daily_hours_min=settings.DAILY_HOURS_MIN,
        daily_hours_max=settings.DAILY_HOURS_MAX,
        project_share_cap=settings.PROJECT_SHARE_CAP,
        min_project_hours=settings.MIN_PROJECT_HOURS,
    )


@lru_cache
def get_reference_data() -> ReferenceData:
    """Reference tables, loaded once from REFERENCE_DATA_PATH or the built-in defaults."""
    reference = DEFAULT_REFERENCE_DATA
    if settings.REFERENCE_DATA_PATH:
        logger.info("Loading reference data from %s", settings.REFERENCE_DATA_PATH)
        reference = load_reference_data(settings.REFERENCE_DATA_PATH)
    return reference.validate(settings.DAILY_HOURS_MIN, settings.MIN_PROJECT_HOURS)


def get_rng() -> random.Random:
    return _rng


def get_employee_or_404(reference: ReferenceData, employee_id: str) -> Employee:
    employee = reference.find_employee(employee_id)
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee {employee_id} not found"
        )
    return employee


def resolve_period_or_400(from_date=None, to_date=None, date_range=None):
    """resolve_period for request handlers: bad input becomes a 400."""
    try:
        start, end = resolve_period(from_date, to_date, date_range, settings.DEFAULT_RANGE_DAYS)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if (end - start).days + 1 > settings.MAX_RANGE_DAYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Date range cannot exceed {settings.MAX_RANGE_DAYS} days"
        )
    return start, end
