from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from django.utils import timezone


def calculate_calendar_date_range(
    week: int | None = None,
    month: int | None = None,
    year: int | None = None,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """Calculate start and end datetime for calendar views.

    Args:
        week: ISO week number (1-53), optionally with year
        month: Month number (1-12), optionally with year
        year: Year (e.g., 2025)
        now: Reference time for the defaults, the current time if omitted

    Returns:
        Tuple of (start_datetime, end_datetime), a half-open UTC range.
        If no parameters provided, returns current month range.

    Priority: week > month > year > current_month
    """
    now = now or timezone.now()
    utc = ZoneInfo("UTC")

    if week is not None:
        # Jan 4 always falls in ISO week 1
        target_year = year or now.year
        jan_4 = datetime(target_year, 1, 4, tzinfo=utc)
        week_1_start = jan_4 - timedelta(days=jan_4.isoweekday() - 1)
        start = week_1_start + timedelta(weeks=week - 1)
        return start, start + timedelta(weeks=1)

    if year is not None and month is None:
        return datetime(year, 1, 1, tzinfo=utc), datetime(year + 1, 1, 1, tzinfo=utc)

    target_year = year or now.year
    target_month = month or now.month
    start = datetime(target_year, target_month, 1, tzinfo=utc)
    if target_month == 12:
        return start, datetime(target_year + 1, 1, 1, tzinfo=utc)
    return start, datetime(target_year, target_month + 1, 1, tzinfo=utc)
