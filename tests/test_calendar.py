"""Tests for 4-week calendar arithmetic."""

from datetime import date, datetime, timedelta

import pytest

from family_meal_planner.planning.calendar import (
    format_date_range,
    format_week_range,
    generate_four_week_dates,
    generate_week_dates,
    get_current_week_number,
    get_days_remaining,
    get_week_start_date,
    is_date_in_plan,
    plan_end_date,
)

START = date(2024, 3, 15)


@pytest.mark.parametrize("start", [date(2024, 3, 15), date(2023, 12, 20), date(2024, 2, 10)])
def test_four_week_dates_are_the_four_weeks_concatenated(start):
    """28 consecutive days, equal to weeks 0..3 back to back."""
    dates = generate_four_week_dates(start)

    assert len(dates) == 28
    assert dates[0] == start
    assert dates == [d for week in range(4) for d in generate_week_dates(start, week)]
    assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))


def test_week_dates_start_seven_days_apart():
    week2 = generate_week_dates(START, 2)

    assert week2[0] == date(2024, 3, 29)
    assert week2[-1] == date(2024, 4, 4)
    assert get_week_start_date(START, 3) == date(2024, 4, 5)


@pytest.mark.parametrize("week", [-1, 4])
def test_week_index_out_of_range_is_rejected(week):
    with pytest.raises(ValueError):
        generate_week_dates(START, week)


def test_datetime_input_is_reduced_to_its_date():
    """Late-evening timestamps must not shift the window by a day."""
    late = datetime(2024, 3, 15, 23, 59)

    assert generate_four_week_dates(late)[0] == START
    assert get_current_week_number(late, datetime(2024, 3, 22, 0, 1)) == 1


@pytest.mark.parametrize(
    "reference, expected",
    [
        (date(2024, 3, 15), 0),
        (date(2024, 3, 21), 0),
        (date(2024, 3, 22), 1),
        (date(2024, 4, 11), 3),
        (date(2024, 4, 12), None),
        (date(2024, 3, 14), None),
    ],
)
def test_current_week_number(reference, expected):
    assert get_current_week_number(START, reference) == expected


def test_plan_window_bounds():
    assert plan_end_date(START) == date(2024, 4, 11)
    assert is_date_in_plan(START, date(2024, 4, 11))
    assert not is_date_in_plan(START, date(2024, 4, 12))


def test_format_week_range_uses_last_day_of_week():
    assert format_week_range(START, 0) == "3/15 - 3/21"
    assert format_week_range(START, 2) == "3/29 - 4/4"


def test_format_date_range_shows_years_across_new_year():
    assert format_date_range(date(2024, 3, 15), date(2024, 4, 11)) == "3/15 - 4/11"
    assert format_date_range(date(2024, 12, 28), date(2025, 1, 3)) == "12/28/2024 - 1/3/2025"


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2024, 3, 1), 28),
        (date(2024, 3, 15), 28),
        (date(2024, 4, 11), 1),
        (date(2024, 4, 12), 0),
    ],
)
def test_days_remaining(today, expected):
    assert get_days_remaining(START, today) == expected
