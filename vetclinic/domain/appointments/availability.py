"""
Availability rules for booking a doctor's visit

A slot at `time` with visit duration D is bookable when:
- it starts within opening hours and the visit ends by closing time, and
- no other appointment of the doctor starts strictly within (time - D, time + D),
  nor exactly at `time`.
"""

from datetime import date, datetime, time, timedelta

from ...exceptions import UnavailableDateError
from .schemas import AppointmentRequest
from ..visit_details.schemas import TimingDetailsDTO

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

# Anchor date for time-of-day arithmetic
_ANCHOR = date(2000, 1, 1)


def check_is_open(timing: TimingDetailsDTO, requested: time) -> None:
    """Raise UnavailableDateError unless a visit at `requested` fits in opening hours"""
    opening_at = timing.opening_at
    closing_at = timing.closing_at
    duration = timing.visit_duration_minutes
    # Compared on one anchored day so `closing_at - D` never wraps past midnight
    latest_start = datetime.combine(_ANCHOR, closing_at) - timedelta(minutes=duration)
    requested_ts = datetime.combine(_ANCHOR, requested)

    if requested < opening_at or requested == closing_at or requested_ts > latest_start:
        raise UnavailableDateError(
            f"Cannot schedule appointment at {requested.strftime('%H:%M')}. "
            f"Visit duration: {duration} min. "
            f"Opening times: {opening_at.strftime('%H:%M')} - {closing_at.strftime('%H:%M')}."
        )


def conflict_window(day: date, requested: time, duration: int) -> tuple[datetime, datetime, datetime]:
    """
    Timestamps bounding the conflicts of a visit.

    Returns:
        (start_ts, end_ts, at_ts) where start_ts/end_ts are exclusive bounds
        and at_ts is the requested start itself. Bounds may fall on the
        previous or next day.
    """
    at_ts = datetime.combine(day, requested)
    span = timedelta(minutes=duration)
    return at_ts - span, at_ts + span, at_ts


def ensure_not_in_past(request: AppointmentRequest, now: datetime) -> None:
    if request.date < now.date() or (request.date == now.date() and request.time < now.time()):
        raise UnavailableDateError(
            f"Appointment time must not be in past. "
            f"Request time: '{datetime.combine(request.date, request.time).strftime(TIMESTAMP_FORMAT)}'."
        )


def slot_taken(at_ts: datetime) -> UnavailableDateError:
    return UnavailableDateError(
        f"Date '{at_ts.strftime(TIMESTAMP_FORMAT)}' is already taken. "
        f"Please try to schedule the appointment at a different time."
    )


def ensure_available(is_available: bool, at_ts: datetime) -> None:
    if not is_available:
        raise slot_taken(at_ts)
