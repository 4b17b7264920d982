"""
Test helpers for unit tests

Provides reusable test doubles (stubs, mocks, fakes) for common dependencies
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import AsyncMock
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.event_booking.app.dto.booking_result import SeatDebit
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.domain.entity.event_entity import EventEntity


TEST_BOOKING_ID = UUID('01936d8f-5e73-7c4e-a9c5-123456789abc')
TEST_USER_ID = 7
TEST_EVENT_ID = 1


def make_event(
    *,
    event_id: int = TEST_EVENT_ID,
    starts_in: timedelta = timedelta(hours=48),
    price: int = 1500,
    total_seats: int = 100,
    available_seats: Optional[int] = None,
) -> EventEntity:
    return EventEntity(
        id=event_id,
        title='PyCon Taiwan',
        description='Annual Python community conference',
        category='conference',
        location='Taipei',
        venue='Academia Sinica',
        date=datetime.now(timezone.utc) + starts_in,
        time='09:00',
        price=price,
        total_seats=total_seats,
        available_seats=total_seats if available_seats is None else available_seats,
        created_by=1,
    )


def make_booking(
    *,
    booking_id: UUID = TEST_BOOKING_ID,
    user_id: int = TEST_USER_ID,
    event_id: int = TEST_EVENT_ID,
    seats_booked: int = 2,
    total_amount: int = 3000,
    status: BookingStatus = BookingStatus.CONFIRMED,
    idempotency_key: Optional[str] = None,
) -> Booking:
    now = datetime.now(timezone.utc)
    return Booking(
        id=booking_id,
        user_id=user_id,
        event_id=event_id,
        seats_booked=seats_booked,
        total_amount=total_amount,
        status=status,
        booking_date=now,
        idempotency_key=idempotency_key,
        created_at=now,
        updated_at=now,
    )


class FakeUnitOfWork(AbstractUnitOfWork):
    """
    In-memory UoW whose repositories are AsyncMocks

    Every `async with` re-enters the same instance, so a test can inspect the
    calls made across retries. `commits` and `rollbacks` count transaction ends.

    Example:
        ```python
        uow = FakeUnitOfWork(event=make_event(), debit=SeatDebit(available_seats=98, price=1500))
        use_case = CreateBookingUseCase(uow_factory=lambda: uow)
        ```
    """

    def __init__(
        self,
        *,
        event: Optional[EventEntity] = None,
        booking: Optional[Booking] = None,
        active_booking: Optional[Booking] = None,
        replay_booking: Optional[Booking] = None,
        debit: Optional[SeatDebit] = None,
        available_seats: Optional[int] = None,
        cancelled_booking: Optional[Booking] = None,
        released_to: Optional[int] = None,
    ) -> None:
        self.commits = 0
        self.rollbacks = 0

        self.event_query_repo = AsyncMock()
        self.event_query_repo.get_by_id = AsyncMock(return_value=event)
        self.event_query_repo.get_available_seats = AsyncMock(return_value=available_seats)

        self.event_command_repo = AsyncMock()
        self.event_command_repo.decrement_available_seats = AsyncMock(return_value=debit)
        self.event_command_repo.increment_available_seats = AsyncMock(return_value=released_to)

        self.booking_query_repo = AsyncMock()
        self.booking_query_repo.find_active = AsyncMock(return_value=active_booking)
        self.booking_query_repo.find_by_idempotency_key = AsyncMock(return_value=replay_booking)

        self.booking_command_repo = AsyncMock()
        self.booking_command_repo.create = AsyncMock(side_effect=self._create_booking)
        self.booking_command_repo.get_for_user = AsyncMock(return_value=booking)
        self.booking_command_repo.mark_cancelled = AsyncMock(return_value=cancelled_booking)

    async def _create_booking(self, *, booking: Booking) -> Booking:
        """Mock: Return booking as-is (simulates successful persistence)"""
        return booking

    async def _commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

