from datetime import date, datetime

import pytest
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from checklist_core.common.dates import day_bounds, parse_day, range_bounds


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-01", date(2024, 1, 1)),
        ("2024-01-01T03:00:00", date(2024, 1, 1)),
        ("2024-01-01T22:00:00", date(2024, 1, 1)),
        ("2024-01-02T00:00:00", date(2024, 1, 2)),
        (date(2024, 6, 1), date(2024, 6, 1)),
        (datetime(2024, 6, 1, 23, 59), date(2024, 6, 1)),
    ],
)
def test_parse_day_truncates_to_calendar_day(raw, expected):
    assert parse_day(raw) == expected


@pytest.mark.parametrize("raw", ["yesterday", "2024-13-40", "01/06/2024"])
def test_parse_day_rejects_garbage(raw):
    with pytest.raises(ValidationError) as exc:
        parse_day(raw, "start_date")
    assert "start_date" in exc.value.detail


def test_parse_day_missing_value_is_required():
    with pytest.raises(ValidationError) as exc:
        parse_day(None)
    assert "date" in exc.value.detail


def test_day_bounds_cover_one_local_day():
    start, end = day_bounds(date(2024, 6, 1))
    assert timezone.is_aware(start) and timezone.is_aware(end)
    assert timezone.localtime(start).date() == date(2024, 6, 1)
    assert timezone.localtime(end).date() == date(2024, 6, 2)
    assert timezone.localtime(start).hour == 0


def test_range_bounds_is_inclusive_of_end_day():
    lower, upper = range_bounds(date(2024, 6, 1), date(2024, 6, 3))
    assert timezone.localtime(lower).date() == date(2024, 6, 1)
    assert timezone.localtime(upper).date() == date(2024, 6, 4)


def test_range_bounds_rejects_reversed_range():
    with pytest.raises(ValidationError):
        range_bounds(date(2024, 6, 3), date(2024, 6, 1))
