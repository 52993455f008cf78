"""Default configuration for newly created companies."""

from datetime import datetime, timezone

from src.schemas.company import CompanyDefaults, DayType, TimeTemplate
from src.services.calendar_service import generate_default_values, generate_periods
from src.services.company_constants import (
    DEFAULT_AVAILABLE_POSITIONS,
    DEFAULT_DAY_TYPES,
    DEFAULT_TEMPLATE,
)


def build_default_company(now: datetime | None = None) -> CompanyDefaults:
    """Assemble the template, calendar, day types and roles of a new company.

    Has no side effects. Two calls with the same ``now`` return equal
    results; every call returns fresh objects.

    Args:
        now: Creation instant, defaults to the current UTC time.

    Returns:
        CompanyDefaults: Defaults ready to merge into a company document.
    """
    now = now or datetime.now(timezone.utc)
    periods = generate_periods(now)

    return CompanyDefaults(
        template=TimeTemplate(**DEFAULT_TEMPLATE),
        periods=periods,
        day_types=[DayType(**day_type) for day_type in DEFAULT_DAY_TYPES],
        default_values=generate_default_values(periods),
        available_positions=list(DEFAULT_AVAILABLE_POSITIONS),
    )
