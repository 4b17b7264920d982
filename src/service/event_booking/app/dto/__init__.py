"""Application layer DTOs"""

from src.service.event_booking.app.dto.booking_result import (
    CancelBookingResult,
    CreateBookingResult,
    SeatDebit,
)
from src.service.event_booking.app.dto.booking_view import (
    BookingFilter,
    BookingPage,
    BookingWithEvent,
    EventBookingReport,
    EventSummary,
    StatusStats,
)
from src.service.event_booking.app.dto.dashboard_stats import DashboardStats
from src.service.event_booking.app.dto.event_view import EventFilter, EventPage
from src.service.event_booking.app.dto.pagination import Pagination, clamp_page

__all__ = [
    'BookingFilter',
    'BookingPage',
    'BookingWithEvent',
    'CancelBookingResult',
    'CreateBookingResult',
    'DashboardStats',
    'EventBookingReport',
    'EventFilter',
    'EventPage',
    'EventSummary',
    'Pagination',
    'SeatDebit',
    'StatusStats',
    'clamp_page',
]
