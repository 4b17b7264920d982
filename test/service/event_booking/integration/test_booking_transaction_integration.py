"""
Booking transaction properties against the real unit of work:
conservation, terminal cancellation, exact release, atomicity, idempotent replay.
"""

from datetime import timedelta
from unittest.mock import patch
from uuid import uuid4

import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    InsufficientCapacityError,
    InternalError,
    InvalidStateError,
    NotFoundError,
)
from src.service.event_booking.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.event_booking.domain.entity.booking_entity import BookingStatus
from src.service.event_booking.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.event_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.event_booking.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)
from test.service.event_booking.integration.conftest import assert_seats_conserved


@pytest.mark.integration
class TestCreateBooking:
    @pytest.mark.asyncio
    async def test_create_debits_seats_and_records_price(
        self, seed_event, create_booking_use_case, event_query_repo, confirmed_bookings
    ) -> None:
        event = await seed_event(total_seats=10, price=750)

        result = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=4
        )

        assert result.remaining_seats == 6
        assert result.booking.total_amount == 3000
        assert result.booking.status == BookingStatus.CONFIRMED
        await assert_seats_conserved(
            event_query_repo,
            await confirmed_bookings(event_id=event.id),
            event_id=event.id,
            total_seats=10,
        )

    @pytest.mark.asyncio
    async def test_over_capacity_fails_without_side_effects(
        self, seed_event, create_booking_use_case, event_query_repo, confirmed_bookings
    ) -> None:
        event = await seed_event(total_seats=3)

        with pytest.raises(InsufficientCapacityError) as exc_info:
            await create_booking_use_case.create_booking(
                user_id=1, event_id=event.id, seats_requested=4
            )

        assert exc_info.value.remaining == 3
        assert await event_query_repo.get_available_seats(event_id=event.id) == 3
        assert await confirmed_bookings(event_id=event.id) == []

    @pytest.mark.asyncio
    async def test_second_booking_for_same_event_conflicts(
        self, seed_event, create_booking_use_case, event_query_repo
    ) -> None:
        event = await seed_event(total_seats=10)
        await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=2
        )

        with pytest.raises(ConflictError):
            await create_booking_use_case.create_booking(
                user_id=1, event_id=event.id, seats_requested=1
            )

        assert await event_query_repo.get_available_seats(event_id=event.id) == 8

    @pytest.mark.asyncio
    async def test_past_event_cannot_be_booked(self, seed_event, create_booking_use_case) -> None:
        event = await seed_event(starts_in=timedelta(hours=-1))

        with pytest.raises(InvalidStateError):
            await create_booking_use_case.create_booking(
                user_id=1, event_id=event.id, seats_requested=1
            )

    @pytest.mark.asyncio
    async def test_unknown_event_is_not_found(self, create_booking_use_case) -> None:
        with pytest.raises(NotFoundError):
            await create_booking_use_case.create_booking(
                user_id=1, event_id=424242, seats_requested=1
            )

    @pytest.mark.asyncio
    async def test_price_change_does_not_touch_existing_total(
        self, seed_event, create_booking_use_case, uow_factory, booking_query_repo
    ) -> None:
        event = await seed_event(price=500)
        result = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=2
        )

        async with uow_factory() as uow:
            await uow.event_command_repo.update_details(event=event.update_details(price=900))
            await uow.commit()

        stored = await booking_query_repo.get_with_event(
            booking_id=result.booking.id, user_id=1
        )
        assert stored is not None
        assert stored.booking.total_amount == 1000
        assert stored.event is not None
        assert stored.event.price == 900


@pytest.mark.integration
class TestIdempotentReplay:
    @pytest.mark.asyncio
    async def test_same_key_returns_original_booking_once(
        self, seed_event, create_booking_use_case, event_query_repo, confirmed_bookings
    ) -> None:
        event = await seed_event(total_seats=10)

        first = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=2, idempotency_key='checkout-1'
        )
        second = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=2, idempotency_key='checkout-1'
        )

        assert first.created
        assert not second.created
        assert second.booking.id == first.booking.id
        assert await event_query_repo.get_available_seats(event_id=event.id) == 8
        assert len(await confirmed_bookings(event_id=event.id)) == 1

    @pytest.mark.asyncio
    async def test_same_key_from_another_user_is_independent(
        self, seed_event, create_booking_use_case, event_query_repo
    ) -> None:
        event = await seed_event(total_seats=10)

        await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=1, idempotency_key='shared'
        )
        other = await create_booking_use_case.create_booking(
            user_id=2, event_id=event.id, seats_requested=1, idempotency_key='shared'
        )

        assert other.created
        assert await event_query_repo.get_available_seats(event_id=event.id) == 8


@pytest.mark.integration
class TestCancelBooking:
    @pytest.mark.asyncio
    async def test_cancel_releases_exactly_booked_seats(
        self,
        seed_event,
        create_booking_use_case,
        cancel_booking_use_case,
        event_query_repo,
        confirmed_bookings,
    ) -> None:
        event = await seed_event(total_seats=10)
        created = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=3
        )

        result = await cancel_booking_use_case.cancel_booking(
            user_id=1, booking_id=created.booking.id
        )

        assert result.seats_released == 3
        assert result.booking.status == BookingStatus.CANCELLED
        assert await event_query_repo.get_available_seats(event_id=event.id) == 10
        assert await confirmed_bookings(event_id=event.id) == []

    @pytest.mark.asyncio
    async def test_cancel_is_terminal(
        self, seed_event, create_booking_use_case, cancel_booking_use_case, event_query_repo
    ) -> None:
        event = await seed_event(total_seats=10)
        created = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=3
        )
        await cancel_booking_use_case.cancel_booking(user_id=1, booking_id=created.booking.id)

        with pytest.raises(InvalidStateError):
            await cancel_booking_use_case.cancel_booking(
                user_id=1, booking_id=created.booking.id
            )

        assert await event_query_repo.get_available_seats(event_id=event.id) == 10

    @pytest.mark.asyncio
    async def test_rebooking_after_cancel_is_allowed(
        self, seed_event, create_booking_use_case, cancel_booking_use_case, confirmed_bookings
    ) -> None:
        event = await seed_event(total_seats=10)
        created = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=3
        )
        await cancel_booking_use_case.cancel_booking(user_id=1, booking_id=created.booking.id)

        again = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=1
        )

        assert again.booking.id != created.booking.id
        assert [b.id for b in await confirmed_bookings(event_id=event.id)] == [again.booking.id]

    @pytest.mark.asyncio
    async def test_cancel_inside_cutoff_is_rejected(
        self, seed_event, create_booking_use_case, cancel_booking_use_case, event_query_repo
    ) -> None:
        event = await seed_event(total_seats=10, starts_in=timedelta(hours=10))
        created = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=2
        )

        with pytest.raises(InvalidStateError):
            await cancel_booking_use_case.cancel_booking(
                user_id=1, booking_id=created.booking.id
            )

        assert await event_query_repo.get_available_seats(event_id=event.id) == 8

    @pytest.mark.asyncio
    async def test_cancel_by_other_user_is_not_found(
        self, seed_event, create_booking_use_case, cancel_booking_use_case
    ) -> None:
        event = await seed_event(total_seats=10)
        created = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=2
        )

        with pytest.raises(NotFoundError):
            await cancel_booking_use_case.cancel_booking(
                user_id=2, booking_id=created.booking.id
            )

    @pytest.mark.asyncio
    async def test_cancel_unknown_booking_is_not_found(self, cancel_booking_use_case) -> None:
        with pytest.raises(NotFoundError):
            await cancel_booking_use_case.cancel_booking(user_id=1, booking_id=uuid4())


@pytest.mark.integration
class TestAtomicity:
    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back_seat_debit(
        self, seed_event, create_booking_use_case, event_query_repo, confirmed_bookings
    ) -> None:
        event = await seed_event(total_seats=10)

        with (
            patch.object(BookingCommandRepoImpl, 'create', side_effect=RuntimeError('disk full')),
            pytest.raises(InternalError),
        ):
            await create_booking_use_case.create_booking(
                user_id=1, event_id=event.id, seats_requested=4
            )

        assert await event_query_repo.get_available_seats(event_id=event.id) == 10
        assert await confirmed_bookings(event_id=event.id) == []

    @pytest.mark.asyncio
    async def test_failed_seat_credit_keeps_booking_confirmed(
        self,
        seed_event,
        create_booking_use_case,
        cancel_booking_use_case,
        event_query_repo,
        confirmed_bookings,
    ) -> None:
        event = await seed_event(total_seats=10)
        created = await create_booking_use_case.create_booking(
            user_id=1, event_id=event.id, seats_requested=4
        )

        with (
            patch.object(
                EventCommandRepoImpl,
                'increment_available_seats',
                side_effect=RuntimeError('connection reset'),
            ),
            pytest.raises(InternalError),
        ):
            await cancel_booking_use_case.cancel_booking(
                user_id=1, booking_id=created.booking.id
            )

        assert await event_query_repo.get_available_seats(event_id=event.id) == 6
        assert [b.id for b in await confirmed_bookings(event_id=event.id)] == [
            created.booking.id
        ]


@pytest.mark.integration
class TestDeleteEventWithBookings:
    @pytest.mark.asyncio
    async def test_booking_committed_after_count_blocks_delete(
        self,
        seed_event,
        uow_factory,
        create_booking_use_case,
        event_query_repo,
        confirmed_bookings,
    ) -> None:
        event = await seed_event(total_seats=10)
        original_count = BookingQueryRepoImpl.count_by_event

        async def count_then_book(self, *, event_id: int) -> int:
            count = await original_count(self, event_id=event_id)
            # Another request confirms a booking right after the guard read
            await create_booking_use_case.create_booking(
                user_id=2, event_id=event_id, seats_requested=3
            )
            return count

        with (
            patch.object(BookingQueryRepoImpl, 'count_by_event', count_then_book),
            pytest.raises(ConflictError),
        ):
            await DeleteEventUseCase(uow_factory=uow_factory).delete_event(event_id=event.id)

        assert await event_query_repo.get_by_id(event_id=event.id) is not None
        confirmed = await confirmed_bookings(event_id=event.id)
        assert [b.seats_booked for b in confirmed] == [3]
        await assert_seats_conserved(
            event_query_repo, confirmed, event_id=event.id, total_seats=10
        )

    @pytest.mark.asyncio
    async def test_event_without_bookings_is_deleted(
        self, seed_event, uow_factory, event_query_repo
    ) -> None:
        event = await seed_event()

        await DeleteEventUseCase(uow_factory=uow_factory).delete_event(event_id=event.id)

        assert await event_query_repo.get_by_id(event_id=event.id) is None
