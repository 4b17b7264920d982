from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.service.event_booking.app.dto.booking_view import (
    BookingPage,
    BookingWithEvent,
    EventSummary,
    StatusStats,
    UserSummary,
)
from src.service.event_booking.domain.entity.booking_entity import Booking
from src.service.event_booking.driving_adapter.http_controller.schema.event_schema import (
    PaginationResponse,
)


class BookingCreateRequest(BaseModel):
    event_id: int
    # Range is enforced by the use case so the error carries the booking limit
    seats_booked: int
    idempotency_key: Optional[str] = Field(None, min_length=1, max_length=128)

    class Config:
        json_schema_extra = {
            'examples': [
                {'event_id': 1, 'seats_booked': 2},
                {'event_id': 1, 'seats_booked': 2, 'idempotency_key': 'checkout-7f3a'},
            ]
        }


class BookingResponse(BaseModel):
    id: UUID
    user_id: int
    event_id: int
    seats_booked: int
    total_amount: int
    status: str
    booking_date: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 2,
                'event_id': 1,
                'seats_booked': 2,
                'total_amount': 3000,
                'status': 'confirmed',
                'booking_date': '2026-01-10T10:30:00Z',
            }
        }

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            seats_booked=booking.seats_booked,
            total_amount=booking.total_amount,
            status=booking.status.value,
            booking_date=booking.booking_date,
        )


class BookingEventResponse(BaseModel):
    id: int
    title: str
    category: str
    location: str
    venue: str
    date: datetime
    time: str
    price: int
    image_url: Optional[str] = None

    @classmethod
    def from_dto(cls, summary: EventSummary) -> 'BookingEventResponse':
        return cls(
            id=summary.id,
            title=summary.title,
            category=summary.category,
            location=summary.location,
            venue=summary.venue,
            date=summary.date,
            time=summary.time,
            price=summary.price,
            image_url=summary.image_url,
        )


class BookingWithEventResponse(BookingResponse):
    """Booking with a summary of its event"""

    event: Optional[BookingEventResponse] = None

    @classmethod
    def from_dto(cls, item: BookingWithEvent) -> 'BookingWithEventResponse':
        booking = BookingResponse.from_entity(item.booking)
        return cls(
            **booking.model_dump(),
            event=BookingEventResponse.from_dto(item.event) if item.event else None,
        )


class BookingUserResponse(BaseModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_dto(cls, summary: UserSummary) -> 'BookingUserResponse':
        return cls(id=summary.id, name=summary.name, email=summary.email)


class AdminBookingResponse(BookingWithEventResponse):
    """Booking with its event and the user who made it"""

    user: Optional[BookingUserResponse] = None

    @classmethod
    def from_dto(cls, item: BookingWithEvent) -> 'AdminBookingResponse':
        booking = BookingResponse.from_entity(item.booking)
        return cls(
            **booking.model_dump(),
            event=BookingEventResponse.from_dto(item.event) if item.event else None,
            user=BookingUserResponse.from_dto(item.user) if item.user else None,
        )


class CancelBookingResponse(BaseModel):
    id: UUID
    status: str
    seats_released: int

    class Config:
        json_schema_extra = {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'status': 'cancelled',
                'seats_released': 2,
            }
        }


class BookingStatsResponse(BaseModel):
    status: str
    count: int
    total_seats: int
    total_revenue: int

    @classmethod
    def from_dto(cls, stats: StatusStats) -> 'BookingStatsResponse':
        return cls(
            status=stats.status.value,
            count=stats.count,
            total_seats=stats.total_seats,
            total_revenue=stats.total_revenue,
        )


class BookingListResponse(BaseModel):
    bookings: List[BookingWithEventResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: BookingPage) -> 'BookingListResponse':
        return cls(
            bookings=[BookingWithEventResponse.from_dto(item) for item in page.bookings],
            pagination=PaginationResponse.from_dto(page.pagination),
        )


class AdminBookingListResponse(BookingListResponse):
    bookings: List[AdminBookingResponse]
    stats: List[BookingStatsResponse]

    @classmethod
    def from_page(cls, page: BookingPage) -> 'AdminBookingListResponse':
        return cls(
            bookings=[AdminBookingResponse.from_dto(item) for item in page.bookings],
            pagination=PaginationResponse.from_dto(page.pagination),
            stats=[BookingStatsResponse.from_dto(row) for row in page.stats],
        )


class EventBookingsResponse(BaseModel):
    event: BookingEventResponse
    total_seats: int
    available_seats: int
    bookings: List[AdminBookingResponse]
    pagination: PaginationResponse
    stats: List[BookingStatsResponse]


class DashboardStatsResponse(BaseModel):
    total_events: int
    upcoming_events: int
    total_users: int
    total_bookings: int
    confirmed_bookings: int
    cancelled_bookings: int
    total_revenue: int
    seats_sold: int

    class Config:
        json_schema_extra = {
            'example': {
                'total_events': 12,
                'upcoming_events': 8,
                'total_users': 140,
                'total_bookings': 96,
                'confirmed_bookings': 81,
                'cancelled_bookings': 15,
                'total_revenue': 121500,
                'seats_sold': 162,
            }
        }
