"""
Booking Command Repository Interface

Writes to the Booking store. Always used inside a unit of work together
with IEventCommandRepo so the seat counter and the booking row commit
or roll back as one.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.event_booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert a booking row.

        Raises:
            IntegrityError: a confirmed booking for (user, event) already exists,
                or the (user, idempotency_key) pair is taken
        """
        pass

    @abstractmethod
    async def get_for_user(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        """Get the booking only if it belongs to `user_id`."""
        pass

    @abstractmethod
    async def mark_cancelled(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        """
        Conditional transition confirmed -> cancelled.

        Returns:
            The cancelled booking (with its stored seats_booked), or None if the
            row was not confirmed at the moment of the update.
        """
        pass
