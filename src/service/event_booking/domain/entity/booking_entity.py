from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import InvalidRequestError, InvalidStateError
from src.platform.logging.loguru_io import Logger


class BookingStatus(StrEnum):
    PENDING = 'pending'  # Reserved for a payment step; never produced
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


def validate_seats_requested(seats_requested: int, *, max_seats: int) -> None:
    if seats_requested < 1:
        raise InvalidRequestError('seats_booked must be at least 1')
    if seats_requested > max_seats:
        raise InvalidRequestError(f'Maximum {max_seats} seats per booking')


@attrs.define
class Booking:
    id: UUID
    user_id: int
    event_id: int
    seats_booked: int
    total_amount: int
    status: BookingStatus = BookingStatus.CONFIRMED
    booking_date: Optional[datetime] = None
    idempotency_key: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        event_id: int,
        seats_booked: int,
        unit_price: int,
        idempotency_key: Optional[str] = None,
    ) -> 'Booking':
        """
        Bookings are born confirmed. total_amount is fixed here from the price
        the seats were debited at and never recomputed.
        """
        if unit_price < 0:
            raise InvalidRequestError('Event price cannot be negative')

        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            user_id=user_id,
            event_id=event_id,
            seats_booked=seats_booked,
            total_amount=unit_price * seats_booked,
            status=BookingStatus.CONFIRMED,
            booking_date=now,
            idempotency_key=idempotency_key,
            created_at=now,
            updated_at=now,
        )

    def ensure_confirmed(self) -> None:
        if self.status == BookingStatus.CANCELLED:
            raise InvalidStateError('Booking is already cancelled')
        if self.status != BookingStatus.CONFIRMED:
            raise InvalidStateError(f'Cannot cancel a {self.status.value} booking')

    @Logger.io
    def ensure_cancellable(self, *, event_start: datetime, now: datetime, cutoff: timedelta) -> None:
        """
        Raises:
            InvalidStateError: already cancelled, not confirmed, or inside the cutoff window
        """
        self.ensure_confirmed()
        # Exactly `cutoff` before start is still allowed
        if event_start - now < cutoff:
            hours = int(cutoff.total_seconds() // 3600)
            raise InvalidStateError(f'Cannot cancel booking less than {hours} hours before the event')

