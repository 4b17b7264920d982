"""Event Booking Domain Enums"""

from src.service.event_booking.domain.enum.event_category import EventCategory

__all__ = ['EventCategory']
