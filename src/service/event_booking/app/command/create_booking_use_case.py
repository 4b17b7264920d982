from datetime import datetime, timezone
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import IntegrityError

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    ConflictError,
    InsufficientCapacityError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.event_booking.app.command.booking_transaction import run_booking_transaction
from src.service.event_booking.app.dto.booking_result import CreateBookingResult
from src.service.event_booking.domain.entity.booking_entity import (
    Booking,
    validate_seats_requested,
)


class CreateBookingUseCase:
    """
    Reserve seats on an event: debit the seat pool and record a confirmed booking.

    Flow (one unit of work, one commit):
    1. Validate 1 <= seats <= MAX_SEATS_PER_BOOKING (no I/O)
    2. Replay: an idempotency key this user already used returns that booking
    3. Load event -> NotFound; past event -> InvalidState
    4. Confirmed booking for (user, event) already exists -> Conflict
    5. Conditional decrement of available_seats -> InsufficientCapacity(remaining)
    6. Insert booking (confirmed, total_amount = price x seats)
    7. Commit

    The partial unique index on confirmed (user_id, event_id) backs step 4 when
    two requests from the same user race past the check.
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
    async def create_booking(
        self,
        *,
        user_id: int,
        event_id: int,
        seats_requested: int,
        idempotency_key: Optional[str] = None,
    ) -> CreateBookingResult:
        validate_seats_requested(seats_requested, max_seats=settings.MAX_SEATS_PER_BOOKING)

        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'user.id': user_id,
                'event.id': event_id,
                'booking.seats_requested': seats_requested,
            },
        ) as span:
            result = await run_booking_transaction(
                operation='create',
                unit_of_work=lambda: self._create_once(
                    user_id=user_id,
                    event_id=event_id,
                    seats_requested=seats_requested,
                    idempotency_key=idempotency_key,
                ),
            )
            span.set_attribute('booking.id', str(result.booking.id))
            span.set_attribute('booking.replayed', not result.created)

        if result.created:
            metrics.update_seats_available(
                event_id=event_id, available_seats=result.remaining_seats
            )
            Logger.base.info(
                f'📝 [CREATE-BOOKING] booking={result.booking.id} event={event_id} '
                f'user={user_id} seats={seats_requested} remaining={result.remaining_seats}'
            )
        else:
            Logger.base.info(
                f'🔁 [CREATE-BOOKING] Replayed booking={result.booking.id} '
                f'for idempotency key {idempotency_key}'
            )
        return result

    async def _create_once(
        self,
        *,
        user_id: int,
        event_id: int,
        seats_requested: int,
        idempotency_key: Optional[str],
    ) -> CreateBookingResult:
        try:
            async with self.uow_factory() as uow:
                if idempotency_key:
                    replay = await self._find_replay(
                        uow, user_id=user_id, event_id=event_id, idempotency_key=idempotency_key
                    )
                    if replay:
                        return replay

                event = await uow.event_query_repo.get_by_id(event_id=event_id)
                if not event:
                    raise NotFoundError('Event not found')
                event.ensure_bookable(datetime.now(timezone.utc))

                if await uow.booking_query_repo.find_active(user_id=user_id, event_id=event_id):
                    raise ConflictError('You already have a confirmed booking for this event')

                debit = await uow.event_command_repo.decrement_available_seats(
                    event_id=event_id, seats=seats_requested
                )
                if debit is None:
                    remaining = await uow.event_query_repo.get_available_seats(event_id=event_id)
                    raise InsufficientCapacityError(
                        f'Only {remaining or 0} seats available', remaining=remaining or 0
                    )

                # Priced from the row the decrement returned, not the earlier read
                booking = Booking.create(
                    user_id=user_id,
                    event_id=event_id,
                    seats_booked=seats_requested,
                    unit_price=debit.price,
                    idempotency_key=idempotency_key,
                )
                booking = await uow.booking_command_repo.create(booking=booking)
                await uow.commit()

                return CreateBookingResult(booking=booking, remaining_seats=debit.available_seats)
        except IntegrityError:
            # Lost a race on a unique index; the unit of work has rolled back
            return await self._resolve_unique_violation(
                user_id=user_id, event_id=event_id, idempotency_key=idempotency_key
            )

    async def _find_replay(
        self, uow: AbstractUnitOfWork, *, user_id: int, event_id: int, idempotency_key: str
    ) -> Optional[CreateBookingResult]:
        existing = await uow.booking_query_repo.find_by_idempotency_key(
            user_id=user_id, idempotency_key=idempotency_key
        )
        if not existing:
            return None
        if existing.event_id != event_id:
            raise ConflictError('Idempotency key was already used for a different event')

        remaining = await uow.event_query_repo.get_available_seats(event_id=event_id)
        return CreateBookingResult(booking=existing, remaining_seats=remaining or 0, created=False)

    async def _resolve_unique_violation(
        self, *, user_id: int, event_id: int, idempotency_key: Optional[str]
    ) -> CreateBookingResult:
        if idempotency_key:
            async with self.uow_factory() as uow:
                replay = await self._find_replay(
                    uow, user_id=user_id, event_id=event_id, idempotency_key=idempotency_key
                )
                if replay:
                    return replay
        raise ConflictError('You already have a confirmed booking for this event')
