"""
Booking Command Repository Implementation

Runs only inside a unit of work: the session is injected by SqlAlchemyUnitOfWork
and nothing here commits.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.driven_adapter.model.booking_model import BookingModel
from src.service.event_booking.driven_adapter.repo.model_mapper import to_booking


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self) -> None:
        self.session: AsyncSession | None = None

    def _require_session(self) -> AsyncSession:
        if self.session is None:
            raise RuntimeError('BookingCommandRepoImpl must be used inside a unit of work')
        return self.session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        session = self._require_session()
        db_booking = BookingModel(
            id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            seats_booked=booking.seats_booked,
            total_amount=booking.total_amount,
            status=booking.status.value,
            booking_date=booking.booking_date,
            idempotency_key=booking.idempotency_key,
        )
        session.add(db_booking)
        # Flush now so unique index violations surface inside the unit of work
        await session.flush()
        await session.refresh(db_booking)
        return to_booking(db_booking)

    @Logger.io
    async def get_for_user(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        session = self._require_session()
        result = await session.execute(
            select(BookingModel).where(
                BookingModel.id == booking_id, BookingModel.user_id == user_id
            )
        )
        db_booking = result.scalar_one_or_none()
        return to_booking(db_booking) if db_booking else None

    @Logger.io
    async def mark_cancelled(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        session = self._require_session()
        # Guarded on status so two racing cancels cannot both succeed
        stmt = (
            update(BookingModel)
            .where(
                BookingModel.id == booking_id,
                BookingModel.user_id == user_id,
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
            .values(status=BookingStatus.CANCELLED.value)
            .returning(
                BookingModel.id,
                BookingModel.user_id,
                BookingModel.event_id,
                BookingModel.seats_booked,
                BookingModel.total_amount,
                BookingModel.status,
                BookingModel.booking_date,
                BookingModel.idempotency_key,
                BookingModel.created_at,
                BookingModel.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        row = (await session.execute(stmt)).one_or_none()
        return to_booking(row) if row else None
