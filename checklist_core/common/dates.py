# backend/checklist_core/common/dates.py
"""
Day-bucket helpers.

A checklist "day" is a calendar date in the active time zone. Incoming values may
be plain dates (YYYY-MM-DD) or full ISO datetimes; both are truncated to a day so
that 03:00 and 22:00 on the same date address the same checklist.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework.exceptions import ValidationError

INVALID_DATE_MSG = "Invalid date format."


def parse_day(value, field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return _truncate(value)
    if isinstance(value, date):
        return value

    raw = (str(value).strip() if value is not None else "")
    if not raw:
        raise ValidationError({field_name: "This field is required."})

    try:
        parsed_date = parse_date(raw)
    except ValueError:
        parsed_date = None
    if parsed_date is not None:
        return parsed_date

    try:
        parsed_dt = parse_datetime(raw)
    except ValueError:
        parsed_dt = None
    if parsed_dt is None:
        raise ValidationError({field_name: INVALID_DATE_MSG})
    return _truncate(parsed_dt)


def _truncate(value: datetime) -> date:
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.date()


def start_of_day(day: date) -> datetime:
    return timezone.make_aware(datetime.combine(day, time.min))


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[start of day, start of next day) as aware datetimes."""
    return start_of_day(day), start_of_day(day + timedelta(days=1))


def range_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Inclusive day range -> [start of first day, start of the day after the last)."""
    if start > end:
        raise ValidationError({"start_date": "start_date must be on or before end_date."})
    return start_of_day(start), start_of_day(end + timedelta(days=1))
