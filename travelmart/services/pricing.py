import math
from datetime import datetime, timedelta

from travelmart.core.dates import as_utc
from travelmart.core.errors import ValidationError

ONE_DAY = timedelta(days=1)


def number_of_days(check_in: datetime, check_out: datetime) -> int:
    """Whole days billed for a stay; any part of a day counts as a full day."""
    delta = as_utc(check_out) - as_utc(check_in)
    return math.ceil(delta / ONE_DAY)


def party_quantity(rooms: int | None = None, guests: int | None = None, group_size: int | None = None) -> int:
    # rooms win over guests, guests over group size
    for q in (rooms, guests, group_size):
        if q:
            return max(int(q), 1)
    return 1


def validate_stay(check_in: datetime, check_out: datetime) -> None:
    if as_utc(check_in) >= as_utc(check_out):
        raise ValidationError("Check-out date must be after check-in date", fields=["checkInDate", "checkOutDate"])


def compute_total(unit_price: float, check_in: datetime, check_out: datetime, quantity: int = 1) -> float:
    validate_stay(check_in, check_out)
    return float(unit_price) * number_of_days(check_in, check_out) * max(quantity, 1)


def single_day_total(unit_price: float, quantity: int = 1) -> float:
    # tours and restaurant tables are booked for one date and billed as one day
    return float(unit_price) * max(quantity, 1)
