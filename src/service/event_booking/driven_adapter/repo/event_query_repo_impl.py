from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.dto.event_view import EventFilter
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.repo.model_mapper import to_event


class EventQueryRepoImpl(IEventQueryRepo):
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
    def _conditions(event_filter: EventFilter) -> List[Any]:
        conditions: List[Any] = []
        if not event_filter.include_past:
            conditions.append(EventModel.date > event_filter.now)
        if event_filter.category:
            conditions.append(EventModel.category == event_filter.category)
        if event_filter.location:
            conditions.append(EventModel.location.ilike(f'%{event_filter.location}%'))
        if event_filter.search:
            pattern = f'%{event_filter.search}%'
            conditions.append(
                or_(
                    EventModel.title.ilike(pattern),
                    EventModel.description.ilike(pattern),
                    EventModel.venue.ilike(pattern),
                )
            )
        return conditions

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(EventModel).where(EventModel.id == event_id))
            db_event = result.scalar_one_or_none()
            return to_event(db_event) if db_event else None

    @Logger.io
    async def get_available_seats(self, *, event_id: int) -> Optional[int]:
        async with self._get_session() as session:
            return await session.scalar(
                select(EventModel.available_seats).where(EventModel.id == event_id)
            )

    @Logger.io
    async def list_events(
        self, *, event_filter: EventFilter, offset: int, limit: int
    ) -> tuple[List[EventEntity], int]:
        conditions = self._conditions(event_filter)
        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(EventModel).where(*conditions)
            )
            result = await session.execute(
                select(EventModel)
                .where(*conditions)
                .order_by(EventModel.date.asc(), EventModel.id.asc())
                .offset(offset)
                .limit(limit)
            )
            return [to_event(db_event) for db_event in result.scalars().all()], total or 0

    @Logger.io
    async def list_categories(self) -> List[str]:
        async with self._get_session() as session:
            result = await session.execute(
                select(EventModel.category).distinct().order_by(EventModel.category)
            )
            return list(result.scalars().all())

    @Logger.io
    async def list_locations(self) -> List[str]:
        async with self._get_session() as session:
            result = await session.execute(
                select(EventModel.location).distinct().order_by(EventModel.location)
            )
            return list(result.scalars().all())

    @Logger.io
    async def count_events(self, *, upcoming_after: Optional[datetime] = None) -> int:
        stmt = select(func.count()).select_from(EventModel)
        if upcoming_after is not None:
            stmt = stmt.where(EventModel.date > upcoming_after)
        async with self._get_session() as session:
            return await session.scalar(stmt) or 0
