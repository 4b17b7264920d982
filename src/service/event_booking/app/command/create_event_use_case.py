from datetime import datetime
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.event_booking.domain.entity.event_entity import EventEntity


class CreateEventUseCase:
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
    async def create_event(
        self,
        *,
        created_by: int,
        title: str,
        description: str,
        category: str,
        location: str,
        venue: str,
        date: datetime,
        time: str,
        price: int,
        total_seats: int,
        image_url: Optional[str] = None,
    ) -> EventEntity:
        event = EventEntity.create(
            title=title,
            description=description,
            category=category,
            location=location,
            venue=venue,
            date=date,
            time=time,
            price=price,
            total_seats=total_seats,
            image_url=image_url,
            created_by=created_by,
        )

        async with self.uow_factory() as uow:
            event = await uow.event_command_repo.create(event=event)
            await uow.commit()

        metrics.update_seats_available(event_id=event.id or 0, available_seats=event.available_seats)
        Logger.base.info(
            f'🎪 [CREATE-EVENT] event={event.id} "{event.title}" seats={event.total_seats} '
            f'by admin {created_by}'
        )
        return event
