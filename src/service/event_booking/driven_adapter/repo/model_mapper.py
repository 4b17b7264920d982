"""Model/row -> entity conversion shared by the repositories."""

from typing import Any, Optional

from src.service.event_booking.app.dto.booking_view import EventSummary, UserSummary
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.domain.entity.event_entity import EventEntity, as_utc
from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.model.user_model import UserModel


def _utc_or_none(value: Any) -> Any:
    return as_utc(value) if value is not None else None


def to_booking(row: Any) -> Booking:
    """Accepts a BookingModel or a RETURNING row with the same column names."""
    return Booking(
        id=row.id,
        user_id=row.user_id,
        event_id=row.event_id,
        seats_booked=row.seats_booked,
        total_amount=row.total_amount,
        status=BookingStatus(row.status),
        booking_date=_utc_or_none(row.booking_date),
        idempotency_key=row.idempotency_key,
        created_at=_utc_or_none(row.created_at),
        updated_at=_utc_or_none(row.updated_at),
    )


def to_event(db_event: EventModel) -> EventEntity:
    return EventEntity(
        id=db_event.id,
        title=db_event.title,
        description=db_event.description,
        category=db_event.category,
        location=db_event.location,
        venue=db_event.venue,
        date=db_event.date,
        time=db_event.time,
        price=db_event.price,
        total_seats=db_event.total_seats,
        available_seats=db_event.available_seats,
        image_url=db_event.image_url,
        created_by=db_event.created_by,
        created_at=_utc_or_none(db_event.created_at),
        updated_at=_utc_or_none(db_event.updated_at),
    )


def to_event_summary(db_event: Optional[EventModel]) -> Optional[EventSummary]:
    if db_event is None:
        return None
    return EventSummary(
        id=db_event.id,
        title=db_event.title,
        category=db_event.category,
        location=db_event.location,
        venue=db_event.venue,
        date=as_utc(db_event.date),
        time=db_event.time,
        price=db_event.price,
        image_url=db_event.image_url,
    )


def to_user_summary(db_user: Optional[UserModel]) -> Optional[UserSummary]:
    if db_user is None:
        return None
    return UserSummary(id=db_user.id, name=db_user.name, email=db_user.email)


def to_user(user_model: UserModel) -> UserEntity:
    return UserEntity(
        id=user_model.id,
        email=user_model.email,
        name=user_model.name,
        hashed_password=user_model.hashed_password,
        role=UserRole(user_model.role),
        is_active=user_model.is_active,
        created_at=_utc_or_none(user_model.created_at),
    )
