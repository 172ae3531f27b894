"""Shared validation utilities"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional

from ..exceptions import InvalidArgumentError

PIN_MIN = 1000
PIN_MAX = 9999
MAX_VISIT_DURATION_MINUTES = 24 * 60


def validate_pin(pin: Optional[int]) -> int:
    """
    Validate a customer PIN.

    Args:
        pin: PIN as submitted by the client

    Returns:
        The PIN unchanged

    Raises:
        ValueError: If the PIN is missing or not exactly 4 digits
    """
    if pin is None:
        raise ValueError("Customer pin is required")
    if isinstance(pin, bool) or not PIN_MIN <= pin <= PIN_MAX:
        raise ValueError("Customer pin must be a 4-digit number")
    return pin


def validate_timing_profile(
    visit_duration_minutes: int, opening_at: time, closing_at: time, visit_price: Decimal
) -> None:
    """Reject visit details the availability check cannot work with"""
    if not 0 < visit_duration_minutes <= MAX_VISIT_DURATION_MINUTES:
        raise InvalidArgumentError(
            f"Visit duration must be between 1 and {MAX_VISIT_DURATION_MINUTES} minutes, "
            f"got {visit_duration_minutes}."
        )
    # Overnight opening hours are not supported
    if opening_at >= closing_at:
        raise InvalidArgumentError(
            f"Opening time {opening_at} must be before closing time {closing_at}."
        )
    open_minutes = (
        datetime.combine(date.min, closing_at) - datetime.combine(date.min, opening_at)
    ) / timedelta(minutes=1)
    if open_minutes < visit_duration_minutes:
        raise InvalidArgumentError(
            f"Opening hours {opening_at} - {closing_at} are shorter than one "
            f"{visit_duration_minutes} min visit."
        )
    if visit_price < 0:
        raise InvalidArgumentError(f"Visit price must not be negative, got {visit_price}.")
