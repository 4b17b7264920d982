"""
Event Command Repository Implementation

Runs only inside a unit of work: the session is injected by SqlAlchemyUnitOfWork
and nothing here commits.
"""

from typing import Optional

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.dto.booking_result import SeatDebit
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.repo.model_mapper import to_event


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self) -> None:
        self.session: AsyncSession | None = None

    def _require_session(self) -> AsyncSession:
        if self.session is None:
            raise RuntimeError('EventCommandRepoImpl must be used inside a unit of work')
        return self.session

    @Logger.io
    async def create(self, *, event: EventEntity) -> EventEntity:
        session = self._require_session()
        db_event = EventModel(
            title=event.title,
            description=event.description,
            category=event.category.value,
            location=event.location,
            venue=event.venue,
            date=event.date,
            time=event.time,
            price=event.price,
            total_seats=event.total_seats,
            available_seats=event.available_seats,
            image_url=event.image_url,
            created_by=event.created_by,
        )
        session.add(db_event)
        await session.flush()
        await session.refresh(db_event)
        return to_event(db_event)

    @Logger.io
    async def update_details(self, *, event: EventEntity) -> EventEntity:
        session = self._require_session()
        stmt = (
            update(EventModel)
            .where(EventModel.id == event.id)
            .values(
                title=event.title,
                description=event.description,
                category=event.category.value,
                location=event.location,
                venue=event.venue,
                date=event.date,
                time=event.time,
                price=event.price,
                image_url=event.image_url,
            )
            .returning(EventModel)
            .execution_options(populate_existing=True)
        )
        db_event = (await session.execute(stmt)).scalar_one()
        return to_event(db_event)

    @Logger.io
    async def delete(self, *, event_id: int) -> bool:
        session = self._require_session()
        result = await session.execute(delete(EventModel).where(EventModel.id == event_id))
        return result.rowcount > 0  # type: ignore[attr-defined]

    @Logger.io
    async def decrement_available_seats(self, *, event_id: int, seats: int) -> Optional[SeatDebit]:
        session = self._require_session()
        # Check and debit in one statement: no read-then-write window
        stmt = (
            update(EventModel)
            .where(EventModel.id == event_id, EventModel.available_seats >= seats)
            .values(available_seats=EventModel.available_seats - seats)
            .returning(EventModel.available_seats, EventModel.price)
            .execution_options(synchronize_session=False)
        )
        row = (await session.execute(stmt)).one_or_none()
        if row is None:
            return None
        return SeatDebit(available_seats=row.available_seats, price=row.price)

    @Logger.io
    async def increment_available_seats(self, *, event_id: int, seats: int) -> Optional[int]:
        session = self._require_session()
        stmt = (
            update(EventModel)
            .where(
                EventModel.id == event_id,
                EventModel.available_seats + seats <= EventModel.total_seats,
            )
            .values(available_seats=EventModel.available_seats + seats)
            .returning(EventModel.available_seats)
            .execution_options(synchronize_session=False)
        )
        return (await session.execute(stmt)).scalar_one_or_none()
