"""
Time-slot overlap utilities for employee availability.

A booking occupies the half-open interval ``[start, start + duration)``;
two bookings conflict when those intervals overlap.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, Set, Tuple


def combine(booking_date: date, start_time: time) -> datetime:
    return datetime.combine(booking_date, start_time)


def get_end_time(start: datetime, duration_minutes: int) -> datetime:
    """Calculate when a booking ends."""
    return start + timedelta(minutes=duration_minutes)


def check_time_conflict(start1: datetime, end1: datetime, start2: datetime, end2: datetime) -> bool:
    """
    Check if two time ranges overlap.

    Returns:
        True if there's a conflict (overlap), False otherwise
    """
    # No conflict if one ends before the other starts
    if end1 <= start2 or end2 <= start1:
        return False
    return True


def busy_employee_ids(
    bookings: Iterable[Tuple[Optional[str], date, time, int]],
    requested_start: datetime,
    requested_end: datetime,
) -> Set[str]:
    """
    Collect employees whose bookings overlap the requested interval.

    Args:
        bookings: ``(employee_id, date, time, duration_minutes)`` rows, already
            restricted to statuses that still occupy the employee
        requested_start: Start of the requested interval
        requested_end: End of the requested interval

    Returns:
        Set of employee ids that are not free
    """
    busy = set()
    for employee_id, booking_date, booking_time, duration in bookings:
        if employee_id is None or employee_id in busy:
            continue
        start = combine(booking_date, booking_time)
        end = get_end_time(start, duration or 0)
        if check_time_conflict(requested_start, requested_end, start, end):
            busy.add(employee_id)
    return busy


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``; raises ValueError on bad input"""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def parse_time(value: str) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS``; raises ValueError on bad input"""
    value = value.strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time: {value}")
