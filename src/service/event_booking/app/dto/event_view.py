"""Read-side event DTOs."""

from datetime import datetime
from typing import List, Optional

import attrs

from src.service.event_booking.app.dto.pagination import Pagination
from src.service.event_booking.domain.entity.event_entity import EventEntity


@attrs.define(frozen=True)
class EventFilter:
    now: datetime
    category: Optional[str] = None
    location: Optional[str] = None
    search: Optional[str] = None
    include_past: bool = False


@attrs.define(frozen=True)
class EventPage:
    events: List[EventEntity]
    pagination: Pagination
