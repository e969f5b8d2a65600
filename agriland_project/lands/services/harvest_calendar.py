"""
lands/services/harvest_calendar.py

Harvest date arithmetic. All comparisons happen on calendar
dates so a time-of-day component can never shift a result by
one day.
"""

from datetime import date, datetime, timedelta

from django.utils import timezone


def to_calendar_date(value):
    """
    Reduce a date or datetime to a calendar date.
    Aware datetimes are converted to local time first.
    """
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()

    if isinstance(value, date):
        return value

    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def effective_cycle_days(land):
    """
    The land's own cycle length when set, otherwise its plant
    type's. ``None`` when neither is known.
    """
    if land.harvest_cycle_days is not None:
        return land.harvest_cycle_days

    if land.plant_type_id is None:
        return None

    return land.plant_type.harvest_cycle_days


def is_schedulable(previous_harvest_date, cycle_days) -> bool:
    """
    A land can only be scheduled with a previous harvest date
    and a positive cycle length.
    """
    if previous_harvest_date is None:
        return False

    if cycle_days is None:
        return False

    return cycle_days > 0


def calculate_next_harvest_date(previous_harvest_date, cycle_days: int) -> date:
    if not is_schedulable(previous_harvest_date, cycle_days):
        raise ValueError(
            "A previous harvest date and a positive cycle length are required"
        )

    return to_calendar_date(previous_harvest_date) + timedelta(days=int(cycle_days))


def days_until_harvest(next_harvest_date, today) -> int:
    """
    Signed day count: positive means days remaining,
    zero means due today, negative means days overdue.
    """
    return (to_calendar_date(next_harvest_date) - to_calendar_date(today)).days
