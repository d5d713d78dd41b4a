"""Calendar arithmetic for 4-week meal plans.

All functions work on calendar dates. A ``datetime`` passed in is reduced to
its date first, so time-of-day never shifts a day boundary.
"""

from datetime import date, datetime, timedelta

DAYS_PER_WEEK = 7
WEEKS_PER_PLAN = 4
PLAN_LENGTH_DAYS = DAYS_PER_WEEK * WEEKS_PER_PLAN


def to_calendar_date(value: date | datetime) -> date:
    """Normalize a date or datetime to a plain calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _check_week_index(week_index: int) -> None:
    if week_index < 0 or week_index >= WEEKS_PER_PLAN:
        raise ValueError(f"Week number must be between 0 and {WEEKS_PER_PLAN - 1}")


def get_week_start_date(start: date | datetime, week_index: int) -> date:
    """First day of week ``week_index`` (0-3) of a plan starting at ``start``."""
    _check_week_index(week_index)
    return to_calendar_date(start) + timedelta(days=week_index * DAYS_PER_WEEK)


def generate_week_dates(start: date | datetime, week_index: int) -> list[date]:
    """The 7 consecutive dates of week ``week_index`` (0-3)."""
    week_start = get_week_start_date(start, week_index)
    return [week_start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def generate_four_week_dates(start: date | datetime) -> list[date]:
    """The 28 consecutive dates of a plan starting at ``start``."""
    first = to_calendar_date(start)
    return [first + timedelta(days=i) for i in range(PLAN_LENGTH_DAYS)]


def plan_end_date(start: date | datetime) -> date:
    """Last day covered by a plan starting at ``start``."""
    return to_calendar_date(start) + timedelta(days=PLAN_LENGTH_DAYS - 1)


def day_offset(start: date | datetime, day: date | datetime) -> int:
    """Whole days from ``start`` to ``day`` (negative when ``day`` is earlier)."""
    return (to_calendar_date(day) - to_calendar_date(start)).days


def is_date_in_plan(start: date | datetime, day: date | datetime) -> bool:
    return 0 <= day_offset(start, day) < PLAN_LENGTH_DAYS


def get_current_week_number(start: date | datetime, reference: date | datetime) -> int | None:
    """Week index (0-3) containing ``reference``, or None outside the window."""
    offset = day_offset(start, reference)
    if offset < 0 or offset >= PLAN_LENGTH_DAYS:
        return None
    return offset // DAYS_PER_WEEK


def format_date_range(start: date | datetime, end: date | datetime) -> str:
    """Format as ``M/D - M/D``; years are shown only when they differ."""
    first = to_calendar_date(start)
    last = to_calendar_date(end)
    if first.year != last.year:
        return f"{first.month}/{first.day}/{first.year} - {last.month}/{last.day}/{last.year}"
    return f"{first.month}/{first.day} - {last.month}/{last.day}"


def format_week_range(start: date | datetime, week_index: int) -> str:
    week = generate_week_dates(start, week_index)
    return format_date_range(week[0], week[-1])


def get_days_remaining(start: date | datetime, today: date | datetime | None = None) -> int:
    """Days left in the plan window, counting ``today`` itself."""
    ref = to_calendar_date(today or date.today())
    first = to_calendar_date(start)
    last = plan_end_date(first)
    if ref > last:
        return 0
    if ref < first:
        return PLAN_LENGTH_DAYS
    return (last - ref).days + 1
