from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.event_booking.app.dto.booking_view import (
    BookingFilter,
    BookingWithEvent,
    StatusStats,
)
from src.service.event_booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_with_event(
        self, *, booking_id: UUID, user_id: Optional[int] = None
    ) -> Optional[BookingWithEvent]:
        pass

    @abstractmethod
    async def find_active(self, *, user_id: int, event_id: int) -> Optional[Booking]:
        """The confirmed booking for (user, event), if any."""
        pass

    @abstractmethod
    async def find_by_idempotency_key(
        self, *, user_id: int, idempotency_key: str
    ) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_bookings(
        self, *, booking_filter: BookingFilter, offset: int, limit: int
    ) -> tuple[List[BookingWithEvent], int]:
        """Returns (bookings newest first, total matching)."""
        pass

    @abstractmethod
    async def stats_by_status(self, *, booking_filter: BookingFilter) -> List[StatusStats]:
        pass

    @abstractmethod
    async def count_by_event(self, *, event_id: int) -> int:
        pass
