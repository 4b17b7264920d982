"""Write-side booking results."""

import attrs

from src.service.event_booking.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class SeatDebit:
    """Row returned by the conditional seat decrement."""

    available_seats: int
    price: int


@attrs.define(frozen=True)
class CreateBookingResult:
    booking: Booking
    remaining_seats: int
    # False when an idempotency key matched an earlier booking
    created: bool = True


@attrs.define(frozen=True)
class CancelBookingResult:
    booking: Booking
    seats_released: int
    available_seats: int
