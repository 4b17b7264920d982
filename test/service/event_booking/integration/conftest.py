"""
Integration fixtures: the real SqlAlchemyUnitOfWork on the test SQLite file.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Optional

import pytest

from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.event_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.event_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.event_booking.app.dto.booking_view import BookingFilter
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.driven_adapter.model.user_model import UserModel
from src.service.event_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.event_booking.driven_adapter.repo.event_query_repo_impl import (
    EventQueryRepoImpl,
)


@pytest.fixture
def database() -> Database:
    return Database()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], SqlAlchemyUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(session_factory=database.session)


@pytest.fixture
def create_booking_use_case(uow_factory) -> CreateBookingUseCase:
    return CreateBookingUseCase(uow_factory=uow_factory)


@pytest.fixture
def cancel_booking_use_case(uow_factory) -> CancelBookingUseCase:
    return CancelBookingUseCase(uow_factory=uow_factory)


@pytest.fixture
def event_query_repo(database: Database) -> EventQueryRepoImpl:
    return EventQueryRepoImpl(session_factory=database.session)


@pytest.fixture
def booking_query_repo(database: Database) -> BookingQueryRepoImpl:
    return BookingQueryRepoImpl(session_factory=database.session)


BOOKING_USER_IDS = range(1, 16)


@pytest.fixture
async def booking_users(database: Database) -> list[int]:
    """Plain user rows for the ids the use-case tests book under."""
    async with database.session() as session:
        session.add_all(
            [
                UserModel(
                    id=user_id,
                    email=f'booker{user_id}@example.com',
                    hashed_password='not-a-real-hash',
                    name=f'Booker {user_id}',
                )
                for user_id in BOOKING_USER_IDS
            ]
        )
        await session.commit()
    return list(BOOKING_USER_IDS)


@pytest.fixture
def seed_event(uow_factory, booking_users) -> Callable[..., Awaitable[EventEntity]]:
    """Insert an event directly, bypassing the future-date rule so past events can be seeded."""

    async def _seed(
        *,
        total_seats: int = 10,
        price: int = 1000,
        starts_in: timedelta = timedelta(hours=48),
        available_seats: Optional[int] = None,
    ) -> EventEntity:
        event = EventEntity(
            title='Integration Event',
            description='Seeded for integration tests',
            category='concert',
            location='Taipei',
            venue='Legacy Taipei',
            date=datetime.now(timezone.utc) + starts_in,
            time='20:00',
            price=price,
            total_seats=total_seats,
            available_seats=total_seats if available_seats is None else available_seats,
            created_by=1,
        )
        async with uow_factory() as uow:
            event = await uow.event_command_repo.create(event=event)
            await uow.commit()
        return event

    return _seed


@pytest.fixture
def confirmed_bookings(
    booking_query_repo: BookingQueryRepoImpl,
) -> Callable[..., Awaitable[list[Booking]]]:
    async def _confirmed(*, event_id: int, user_id: Optional[int] = None) -> list[Booking]:
        items, _ = await booking_query_repo.list_bookings(
            booking_filter=BookingFilter(
                event_id=event_id, user_id=user_id, status=BookingStatus.CONFIRMED
            ),
            offset=0,
            limit=1000,
        )
        return [item.booking for item in items]

    return _confirmed


async def assert_seats_conserved(
    event_query_repo: EventQueryRepoImpl,
    confirmed: list[Booking],
    *,
    event_id: int,
    total_seats: int,
) -> int:
    """available_seats + confirmed seats_booked == total_seats, and neither goes negative."""
    available = await event_query_repo.get_available_seats(event_id=event_id)
    assert available is not None
    assert available >= 0
    assert available + sum(b.seats_booked for b in confirmed) == total_seats
    return available
