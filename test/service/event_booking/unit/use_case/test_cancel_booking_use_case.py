"""
Unit tests for CancelBookingUseCase
"""

from datetime import timedelta

import pytest

from src.platform.exception.exceptions import (
    InternalError,
    InvalidStateError,
    NotFoundError,
)
from src.service.event_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.event_booking.domain.entity.booking_entity import BookingStatus
from test.service.event_booking.unit.helpers import (
    TEST_BOOKING_ID,
    TEST_USER_ID,
    FakeUnitOfWork,
    make_booking,
    make_event,
)


def _use_case(uow: FakeUnitOfWork) -> CancelBookingUseCase:
    return CancelBookingUseCase(uow_factory=lambda: uow)


@pytest.mark.unit
class TestCancelBookingUseCase:
    @pytest.mark.asyncio
    async def test_cancel_success__releases_stored_seat_count(self) -> None:
        booking = make_booking(seats_booked=3)
        uow = FakeUnitOfWork(
            booking=booking,
            event=make_event(available_seats=90),
            cancelled_booking=make_booking(seats_booked=3, status=BookingStatus.CANCELLED),
            released_to=93,
        )

        result = await _use_case(uow).cancel_booking(
            user_id=TEST_USER_ID, booking_id=TEST_BOOKING_ID
        )

        assert result.seats_released == 3
        assert result.available_seats == 93
        assert result.booking.status == BookingStatus.CANCELLED
        uow.event_command_repo.increment_available_seats.assert_awaited_once_with(
            event_id=booking.event_id, seats=3
        )
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_cancel_fail__booking_of_other_user_is_not_found(self) -> None:
        uow = FakeUnitOfWork(booking=None, event=make_event())

        with pytest.raises(NotFoundError):
            await _use_case(uow).cancel_booking(user_id=999, booking_id=TEST_BOOKING_ID)

        uow.booking_command_repo.mark_cancelled.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancel_fail__already_cancelled(self) -> None:
        uow = FakeUnitOfWork(
            booking=make_booking(status=BookingStatus.CANCELLED), event=make_event()
        )

        with pytest.raises(InvalidStateError) as exc_info:
            await _use_case(uow).cancel_booking(user_id=TEST_USER_ID, booking_id=TEST_BOOKING_ID)

        assert 'already cancelled' in str(exc_info.value)
        uow.event_command_repo.increment_available_seats.assert_not_awaited()
        assert uow.commits == 0

    @pytest.mark.asyncio
    async def test_cancel_fail__inside_cutoff_window(self) -> None:
        uow = FakeUnitOfWork(
            booking=make_booking(), event=make_event(starts_in=timedelta(hours=10))
        )

        with pytest.raises(InvalidStateError) as exc_info:
            await _use_case(uow).cancel_booking(user_id=TEST_USER_ID, booking_id=TEST_BOOKING_ID)

        assert '24 hours' in str(exc_info.value)
        uow.booking_command_repo.mark_cancelled.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancel_fail__lost_race_to_concurrent_cancel(self) -> None:
        uow = FakeUnitOfWork(booking=make_booking(), event=make_event(), cancelled_booking=None)

        with pytest.raises(InvalidStateError):
            await _use_case(uow).cancel_booking(user_id=TEST_USER_ID, booking_id=TEST_BOOKING_ID)

        uow.event_command_repo.increment_available_seats.assert_not_awaited()
        assert uow.commits == 0

    @pytest.mark.asyncio
    async def test_cancel_fail__credit_overflowing_capacity_is_internal(self) -> None:
        uow = FakeUnitOfWork(
            booking=make_booking(),
            event=make_event(),
            cancelled_booking=make_booking(status=BookingStatus.CANCELLED),
            released_to=None,
        )

        with pytest.raises(InternalError):
            await _use_case(uow).cancel_booking(user_id=TEST_USER_ID, booking_id=TEST_BOOKING_ID)

        assert uow.commits == 0
