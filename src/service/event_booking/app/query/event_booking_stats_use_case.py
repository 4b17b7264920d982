from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.dto.booking_view import (
    BookingFilter,
    BookingPage,
    EventBookingReport,
    EventSummary,
)
from src.service.event_booking.app.dto.pagination import Pagination, clamp_page
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.domain.entity.booking_entity import BookingStatus


class EventBookingStatsUseCase:
    def __init__(
        self, *, event_query_repo: IEventQueryRepo, booking_query_repo: IBookingQueryRepo
    ) -> None:
        self.event_query_repo = event_query_repo
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, booking_query_repo=booking_query_repo)

    @Logger.io
    async def get_event_bookings(
        self,
        *,
        event_id: int,
        status: Optional[BookingStatus] = None,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
    ) -> EventBookingReport:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')

        page, limit = clamp_page(page, limit)
        page_filter = BookingFilter(event_id=event_id, status=status)
        bookings, total = await self.booking_query_repo.list_bookings(
            booking_filter=page_filter, offset=(page - 1) * limit, limit=limit
        )
        # Stats always cover every status of the event, independent of the page filter
        stats = await self.booking_query_repo.stats_by_status(
            booking_filter=BookingFilter(event_id=event_id)
        )

        return EventBookingReport(
            event=EventSummary(
                id=event.id or event_id,
                title=event.title,
                category=event.category.value,
                location=event.location,
                venue=event.venue,
                date=event.date,
                time=event.time,
                price=event.price,
                image_url=event.image_url,
            ),
            total_seats=event.total_seats,
            available_seats=event.available_seats,
            page=BookingPage(
                bookings=bookings,
                pagination=Pagination(page=page, limit=limit, total=total),
                stats=stats,
            ),
        )
