from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


ACTIVE_BOOKING_INDEX = 'uq_booking_active_user_event'
IDEMPOTENCY_KEY_INDEX = 'uq_booking_user_idempotency_key'

_CONFIRMED_ONLY = text("status = 'confirmed'")


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        CheckConstraint('seats_booked >= 1', name='ck_booking_seats_positive'),
        CheckConstraint('total_amount >= 0', name='ck_booking_amount_non_negative'),
        # At most one confirmed booking per (user, event), enforced by storage
        Index(
            ACTIVE_BOOKING_INDEX,
            'user_id',
            'event_id',
            unique=True,
            postgresql_where=_CONFIRMED_ONLY,
            sqlite_where=_CONFIRMED_ONLY,
        ),
        Index(IDEMPOTENCY_KEY_INDEX, 'user_id', 'idempotency_key', unique=True),
        Index('ix_booking_user_event_status', 'user_id', 'event_id', 'status'),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('user.id'), nullable=False, index=True
    )
    # RESTRICT: an event with bookings of any status cannot be deleted
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('event.id', ondelete='RESTRICT'), nullable=False, index=True
    )
    seats_booked: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='confirmed', nullable=False)
    booking_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    idempotency_key: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
