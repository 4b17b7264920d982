"""
Event Command Repository Interface

The only writer of `available_seats`. Both seat operations are single
conditional UPDATE statements, so concurrent callers on the same event
serialize on the row and callers on different events never meet.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.event_booking.app.dto.booking_result import SeatDebit
from src.service.event_booking.domain.entity.event_entity import EventEntity


class IEventCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, event: EventEntity) -> EventEntity:
        pass

    @abstractmethod
    async def update_details(self, *, event: EventEntity) -> EventEntity:
        """Persist descriptive fields only; seat counts are left as stored."""
        pass

    @abstractmethod
    async def delete(self, *, event_id: int) -> bool:
        pass

    @abstractmethod
    async def decrement_available_seats(self, *, event_id: int, seats: int) -> Optional[SeatDebit]:
        """
        Compare-and-decrement: debit `seats` only if at least that many remain.

        Returns:
            The new count and the price read by the same statement, or None
            when the event is missing or has fewer than `seats` left.
        """
        pass

    @abstractmethod
    async def increment_available_seats(self, *, event_id: int, seats: int) -> Optional[int]:
        """
        Credit `seats` back, never past total_seats.

        Returns:
            The new count, or None when the event is missing or the credit would overflow.
        """
        pass
