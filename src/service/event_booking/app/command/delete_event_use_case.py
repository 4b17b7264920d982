from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger


class DeleteEventUseCase:
    """
    Delete an event that no booking references.

    The booking count gives a readable error up front; the RESTRICT foreign key
    on booking.event_id catches a booking committed after that count.
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
    async def delete_event(self, *, event_id: int) -> None:
        try:
            async with self.uow_factory() as uow:
                event = await uow.event_query_repo.get_by_id(event_id=event_id)
                if not event:
                    raise NotFoundError('Event not found')

                # Bookings of any status keep their event
                booking_count = await uow.booking_query_repo.count_by_event(event_id=event_id)
                if booking_count:
                    raise ConflictError(
                        f'Cannot delete event with {booking_count} existing bookings'
                    )

                await uow.event_command_repo.delete(event_id=event_id)
                await uow.commit()
        except IntegrityError as e:
            # A booking landed between the count and the delete; the unit of work rolled back
            raise ConflictError('Cannot delete event with existing bookings') from e

        Logger.base.info(f'🗑️ [DELETE-EVENT] event={event_id}')
