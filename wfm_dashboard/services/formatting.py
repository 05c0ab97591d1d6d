"""
Presentation formatting helpers.

Hours and rates are rounded half-up to one decimal on the decimal value
(Decimal(str(x))), so 0.05 rounds to 0.1 and not to the binary-float
neighbour. Callers sum seconds first and round once per output field.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from wfm_dashboard.models.enums import DAY_NAMES


SECONDS_PER_HOUR = 3600


def round_half_up(value: float, places: int = 1) -> float:
    """Round half-up on the Decimal(str(value)) value to `places` decimals."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def seconds_to_hours(seconds: int) -> float:
    """Convert seconds to hours rounded to 1 decimal."""
    return round_half_up(seconds / SECONDS_PER_HOUR)


def utilization_rate(assigned_seconds: int, scheduled_seconds: int) -> float:
    """
    assigned / scheduled x 100 rounded to 1 decimal.

    Returns 0.0 when nothing was scheduled, whatever was assigned.
    """
    if scheduled_seconds <= 0:
        return 0.0
    return round_half_up(assigned_seconds / scheduled_seconds * 100)


def day_of_week_label(day: date) -> str:
    # date.weekday() is Monday = 0; DAY_NAMES starts on Sunday
    return DAY_NAMES[(day.weekday() + 1) % 7]


def format_clock(seconds: Optional[int]) -> str:
    """Seconds since midnight as HH:MM; 00:00 when unknown."""
    if seconds is None:
        return "00:00"
    hours, remainder = divmod(int(seconds), SECONDS_PER_HOUR)
    return f"{hours:02d}:{remainder // 60:02d}"

