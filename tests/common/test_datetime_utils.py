from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from hamkke_hr.common.datetime_utils import (
    coerce_date,
    coerce_datetime,
    date_range,
    date_span,
    format_minutes,
    month_bounds,
    span_days,
)
from hamkke_hr.common.validators import require_int, require_non_empty
from hamkke_hr.core.exceptions import ValidationError


def test_date_range_ends_today_oldest_first():
    days = date_range(14, today=date(2025, 3, 5))

    assert len(days) == 14
    assert days[-1] == "2025-03-05"
    assert days[0] == "2025-02-20"
    assert days == sorted(days)


def test_date_range_single_day_is_today():
    assert date_range(1, today=date(2025, 1, 1)) == ["2025-01-01"]


@pytest.mark.parametrize("days", [0, -3])
def test_date_range_empty_for_non_positive(days):
    assert date_range(days, today=date(2025, 1, 1)) == []


def test_date_span_is_inclusive_and_crosses_months():
    assert date_span("2025-01-30", date(2025, 2, 2)) == ["2025-01-30", "2025-01-31", "2025-02-01", "2025-02-02"]
    assert date_span("2025-02-02", "2025-01-30") == []
    assert span_days("2025-01-30", "2025-02-02") == 4
    assert span_days("2025-02-02", "2025-01-30") == 0


def test_month_bounds_handles_leap_february():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))


def test_coerce_date_accepts_datetime_and_text():
    assert coerce_date(datetime(2025, 1, 2, 13, 0)) == date(2025, 1, 2)
    assert coerce_date("2025-01-02T13:00:00") == date(2025, 1, 2)


def test_coerce_datetime_normalizes_inputs():
    assert coerce_datetime(None) is None
    assert coerce_datetime("") is None
    assert coerce_datetime("2025-01-02T09:00:00") == datetime(2025, 1, 2, 9, 0)

    aware = datetime(2025, 1, 2, 0, 0, tzinfo=timezone.utc)
    expected = aware.astimezone().replace(tzinfo=None)
    assert coerce_datetime("2025-01-02T00:00:00Z") == expected
    assert coerce_datetime(aware) == expected


def test_coerce_datetime_rejects_unknown_types():
    with pytest.raises(TypeError):
        coerce_datetime(12345)


def test_format_minutes():
    assert format_minutes(540) == "9:00"
    assert format_minutes(65) == "1:05"
    assert format_minutes(0) == "0:00"
    assert format_minutes(-10) == "0:00"


def test_validators():
    assert require_non_empty("  trip  ", "Reason") == "trip"
    assert require_int("5", "Days") == 5

    with pytest.raises(ValidationError):
        require_non_empty("   ", "Reason")
    with pytest.raises(ValidationError):
        require_non_empty(None, "Reason")
    with pytest.raises(ValidationError):
        require_int("five", "Days")
    with pytest.raises(ValidationError):
        require_int(True, "Days")
    with pytest.raises(ValidationError):
        require_int(None, "Days")
