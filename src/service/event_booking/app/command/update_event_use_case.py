from typing import Any, Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.domain.entity.event_entity import EventEntity


class UpdateEventUseCase:
    """
    Update descriptive event fields.

    Seat counts are not updatable, and existing bookings keep the
    total_amount they were created with when the price changes.
    """

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

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
    async def update_event(self, *, event_id: int, changes: dict[str, Any]) -> EventEntity:
        async with self.uow_factory() as uow:
            event = await uow.event_query_repo.get_by_id(event_id=event_id)
            if not event:
                raise NotFoundError('Event not found')

            if not changes:
                return event

            updated = await uow.event_command_repo.update_details(
                event=event.update_details(**changes)
            )
            await uow.commit()

        Logger.base.info(f'✏️ [UPDATE-EVENT] event={event_id} fields={sorted(changes)}')
        return updated
