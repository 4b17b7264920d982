from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Callable, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.dto.booking_view import (
    BookingFilter,
    BookingWithEvent,
    StatusStats,
)
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.driven_adapter.model.booking_model import BookingModel
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.model.user_model import UserModel
from src.service.event_booking.driven_adapter.repo.model_mapper import (
    to_booking,
    to_event_summary,
    to_user_summary,
)


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _conditions(booking_filter: BookingFilter) -> List[Any]:
        conditions: List[Any] = []
        if booking_filter.user_id is not None:
            conditions.append(BookingModel.user_id == booking_filter.user_id)
        if booking_filter.event_id is not None:
            conditions.append(BookingModel.event_id == booking_filter.event_id)
        if booking_filter.status is not None:
            conditions.append(BookingModel.status == booking_filter.status.value)
        return conditions

    @staticmethod
    def _with_event():
        return (
            select(BookingModel, EventModel, UserModel)
            .outerjoin(EventModel, EventModel.id == BookingModel.event_id)
            .outerjoin(UserModel, UserModel.id == BookingModel.user_id)
        )

    @staticmethod
    def _to_view(
        db_booking: BookingModel, db_event: Optional[EventModel], db_user: Optional[UserModel]
    ) -> BookingWithEvent:
        return BookingWithEvent(
            booking=to_booking(db_booking),
            event=to_event_summary(db_event),
            user=to_user_summary(db_user),
        )

    @Logger.io
    async def get_with_event(
        self, *, booking_id: UUID, user_id: Optional[int] = None
    ) -> Optional[BookingWithEvent]:
        stmt = self._with_event().where(BookingModel.id == booking_id)
        if user_id is not None:
            stmt = stmt.where(BookingModel.user_id == user_id)
        async with self._get_session() as session:
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                return None
            return self._to_view(*row)

    @Logger.io
    async def find_active(self, *, user_id: int, event_id: int) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(
                    BookingModel.user_id == user_id,
                    BookingModel.event_id == event_id,
                    BookingModel.status == BookingStatus.CONFIRMED.value,
                )
            )
            db_booking = result.scalar_one_or_none()
            return to_booking(db_booking) if db_booking else None

    @Logger.io
    async def find_by_idempotency_key(
        self, *, user_id: int, idempotency_key: str
    ) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(
                    BookingModel.user_id == user_id,
                    BookingModel.idempotency_key == idempotency_key,
                )
            )
            db_booking = result.scalar_one_or_none()
            return to_booking(db_booking) if db_booking else None

    @Logger.io
    async def list_bookings(
        self, *, booking_filter: BookingFilter, offset: int, limit: int
    ) -> tuple[List[BookingWithEvent], int]:
        conditions = self._conditions(booking_filter)
        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(BookingModel).where(*conditions)
            )
            result = await session.execute(
                self._with_event()
                .where(*conditions)
                .order_by(BookingModel.booking_date.desc(), BookingModel.id.desc())
                .offset(offset)
                .limit(limit)
            )
            bookings = [self._to_view(*row) for row in result.all()]
            return bookings, total or 0

    @Logger.io
    async def stats_by_status(self, *, booking_filter: BookingFilter) -> List[StatusStats]:
        stmt = (
            select(
                BookingModel.status,
                func.count(BookingModel.id),
                func.coalesce(func.sum(BookingModel.seats_booked), 0),
                func.coalesce(func.sum(BookingModel.total_amount), 0),
            )
            .where(*self._conditions(booking_filter))
            .group_by(BookingModel.status)
            .order_by(BookingModel.status)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [
                StatusStats(
                    status=BookingStatus(status),
                    count=count,
                    total_seats=int(total_seats),
                    total_revenue=int(total_revenue),
                )
                for status, count, total_seats, total_revenue in result.all()
            ]

    @Logger.io
    async def count_by_event(self, *, event_id: int) -> int:
        async with self._get_session() as session:
            return (
                await session.scalar(
                    select(func.count())
                    .select_from(BookingModel)
                    .where(BookingModel.event_id == event_id)
                )
                or 0
            )
