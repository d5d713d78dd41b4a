"""Date arithmetic and assignment keys for 4-week plans."""

from family_meal_planner.planning.assignment_key import (
    AssignmentKey,
    AssignmentKeyError,
    decode_assignment_key,
    encode_assignment_key,
    parse_assignment_key,
)
from family_meal_planner.planning.calendar import (
    DAYS_PER_WEEK,
    PLAN_LENGTH_DAYS,
    WEEKS_PER_PLAN,
    format_date_range,
    format_week_range,
    generate_four_week_dates,
    generate_week_dates,
    get_current_week_number,
)

__all__ = [
    "AssignmentKey",
    "AssignmentKeyError",
    "DAYS_PER_WEEK",
    "PLAN_LENGTH_DAYS",
    "WEEKS_PER_PLAN",
    "decode_assignment_key",
    "encode_assignment_key",
    "format_date_range",
    "format_week_range",
    "generate_four_week_dates",
    "generate_week_dates",
    "get_current_week_number",
    "parse_assignment_key",
]
