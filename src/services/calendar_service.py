"""Weekly reporting periods and weekend seeding for new companies.

Weeks run Sunday through Saturday in UTC. A period ends on the last
microsecond of its Saturday and the next one starts one day after that
end, on the Sunday, so consecutive periods cover consecutive calendar days.
"""

from datetime import datetime, time, timedelta, timezone

from src.schemas.company import DayValue, Period
from src.services.company_constants import PERIOD_WEEKS_AFTER_FIRST, WEEKEND

ONE_DAY = timedelta(days=1)


def to_utc(moment: datetime) -> datetime:
    """Return ``moment`` in UTC; naive datetimes are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def day_of_week(moment: datetime) -> int:
    """Day number with Sunday=0 through Saturday=6."""
    return to_utc(moment).isoweekday() % 7


def end_of_week(moment: datetime) -> datetime:
    """Last instant of the Saturday closing ``moment``'s week."""
    moment = to_utc(moment)
    saturday = moment.date() + timedelta(days=6 - day_of_week(moment))
    return datetime.combine(saturday, time.max, tzinfo=timezone.utc)


def is_weekend(moment: datetime) -> bool:
    """True for the two ends of the week.

    With Sunday=0 numbering, ``day % 6 == 0`` matches Sunday and Saturday.
    """
    return day_of_week(moment) % 6 == 0


def generate_periods(now: datetime) -> list[Period]:
    """Build the reporting periods for a company created at ``now``.

    The first period runs from ``now`` to the end of its week, followed by
    53 full weeks: 54 periods, roughly one year.

    Args:
        now: Creation instant. Time of day is kept for the first start.

    Returns:
        list[Period]: Week-by-week periods in chronological order.
    """
    start = to_utc(now)
    end = end_of_week(start)
    periods = [Period(start=start, end=end)]

    for _ in range(PERIOD_WEEKS_AFTER_FIRST):
        start = end + ONE_DAY
        end = end_of_week(start)
        periods.append(Period(start=start, end=end))

    return periods


def generate_default_values(periods: list[Period]) -> list[DayValue]:
    """Mark period boundaries falling on a weekend as Weekend days.

    Start is checked before end, so each period yields at most two values
    and the output keeps period order.
    """
    default_values = []
    for period in periods:
        for boundary in (period.start, period.end):
            if is_weekend(boundary):
                default_values.append(DayValue(date=boundary, day_id=WEEKEND["id"]))
    return default_values
