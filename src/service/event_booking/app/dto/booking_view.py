"""Read-side booking DTOs."""

from datetime import datetime
from typing import List, Optional

import attrs

from src.service.event_booking.app.dto.pagination import Pagination
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus


@attrs.define(frozen=True)
class BookingFilter:
    user_id: Optional[int] = None
    event_id: Optional[int] = None
    status: Optional[BookingStatus] = None


@attrs.define(frozen=True)
class EventSummary:
    id: int
    title: str
    category: str
    location: str
    venue: str
    date: datetime
    time: str
    price: int
    image_url: Optional[str] = None


@attrs.define(frozen=True)
class UserSummary:
    id: int
    name: str
    email: str


@attrs.define(frozen=True)
class BookingWithEvent:
    booking: Booking
    event: Optional[EventSummary] = None
    user: Optional[UserSummary] = None


@attrs.define(frozen=True)
class StatusStats:
    """Aggregate per booking status; cancelled rows are never folded into confirmed."""

    status: BookingStatus
    count: int
    total_seats: int
    total_revenue: int


@attrs.define(frozen=True)
class BookingPage:
    bookings: List[BookingWithEvent]
    pagination: Pagination
    stats: List[StatusStats] = attrs.field(factory=list)


@attrs.define(frozen=True)
class EventBookingReport:
    event: EventSummary
    total_seats: int
    available_seats: int
    page: BookingPage
