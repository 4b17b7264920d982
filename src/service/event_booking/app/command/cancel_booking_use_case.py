from datetime import datetime, timedelta, timezone
from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InternalError, InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.event_booking.app.command.booking_transaction import run_booking_transaction
from src.service.event_booking.app.dto.booking_result import CancelBookingResult


class CancelBookingUseCase:
    """
    Cancel a confirmed booking and credit its seats back to the event.

    Flow (one unit of work, one commit):
    1. Load the caller's booking -> NotFound (also for other users' bookings)
    2. Not confirmed -> InvalidState
    3. Load event -> NotFound; less than the cutoff before start -> InvalidState
    4. Conditional confirmed -> cancelled; zero rows -> InvalidState (lost a race)
    5. Credit the stored seats_booked back to available_seats
    6. Commit
    """

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def cancel_booking(self, *, user_id: int, booking_id: UUID) -> CancelBookingResult:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'user.id': user_id, 'booking.id': str(booking_id)},
        ):
            result = await run_booking_transaction(
                operation='cancel',
                unit_of_work=lambda: self._cancel_once(user_id=user_id, booking_id=booking_id),
            )

        metrics.update_seats_available(
            event_id=result.booking.event_id, available_seats=result.available_seats
        )
        Logger.base.info(
            f'🗑️ [CANCEL-BOOKING] booking={booking_id} event={result.booking.event_id} '
            f'released={result.seats_released} available={result.available_seats}'
        )
        return result

    async def _cancel_once(self, *, user_id: int, booking_id: UUID) -> CancelBookingResult:
        async with self.uow_factory() as uow:
            booking = await uow.booking_command_repo.get_for_user(
                booking_id=booking_id, user_id=user_id
            )
            if not booking:
                raise NotFoundError('Booking not found')
            booking.ensure_confirmed()

            event = await uow.event_query_repo.get_by_id(event_id=booking.event_id)
            if not event:
                raise NotFoundError('Event not found')
            booking.ensure_cancellable(
                event_start=event.date,
                now=datetime.now(timezone.utc),
                cutoff=timedelta(hours=settings.CANCELLATION_CUTOFF_HOURS),
            )

            cancelled = await uow.booking_command_repo.mark_cancelled(
                booking_id=booking_id, user_id=user_id
            )
            if cancelled is None:
                raise InvalidStateError('Booking is already cancelled')

            # Seats come from the stored row, never from the caller
            available_seats = await uow.event_command_repo.increment_available_seats(
                event_id=cancelled.event_id, seats=cancelled.seats_booked
            )
            if available_seats is None:
                raise InternalError('Seat inventory does not match booking records')

            await uow.commit()

            return CancelBookingResult(
                booking=cancelled,
                seats_released=cancelled.seats_booked,
                available_seats=available_seats,
            )
