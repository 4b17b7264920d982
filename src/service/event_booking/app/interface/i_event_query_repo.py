from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.event_booking.app.dto.event_view import EventFilter
from src.service.event_booking.domain.entity.event_entity import EventEntity


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def get_available_seats(self, *, event_id: int) -> Optional[int]:
        pass

    @abstractmethod
    async def list_events(
        self, *, event_filter: EventFilter, offset: int, limit: int
    ) -> tuple[List[EventEntity], int]:
        """Returns (events ordered by date ascending, total matching)."""
        pass

    @abstractmethod
    async def list_categories(self) -> List[str]:
        pass

    @abstractmethod
    async def list_locations(self) -> List[str]:
        pass

    @abstractmethod
    async def count_events(self, *, upcoming_after: Optional[datetime] = None) -> int:
        pass
