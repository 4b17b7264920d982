from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.dto.booking_view import BookingFilter, BookingPage
from src.service.event_booking.app.dto.pagination import Pagination, clamp_page
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.domain.entity.booking_entity import BookingStatus


class ListBookingsUseCase:
    """Booking Query Service: read-only pages and per-status aggregates."""

    def __init__(self, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    async def _page(
        self, booking_filter: BookingFilter, page: int, limit: int, *, with_stats: bool
    ) -> BookingPage:
        page, limit = clamp_page(page, limit)
        pagination_offset = (page - 1) * limit
        bookings, total = await self.booking_query_repo.list_bookings(
            booking_filter=booking_filter, offset=pagination_offset, limit=limit
        )
        stats = (
            await self.booking_query_repo.stats_by_status(booking_filter=booking_filter)
            if with_stats
            else []
        )
        return BookingPage(
            bookings=bookings,
            pagination=Pagination(page=page, limit=limit, total=total),
            stats=stats,
        )

    @Logger.io
    async def list_user_bookings(
        self,
        *,
        user_id: int,
        status: Optional[BookingStatus] = None,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
    ) -> BookingPage:
        return await self._page(
            BookingFilter(user_id=user_id, status=status), page, limit, with_stats=False
        )

    @Logger.io
    async def list_all_bookings(
        self,
        *,
        status: Optional[BookingStatus] = None,
        event_id: Optional[int] = None,
        user_id: Optional[int] = None,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
    ) -> BookingPage:
        """Admin view: stats are computed over the same filter as the page."""
        booking_page = await self._page(
            BookingFilter(user_id=user_id, event_id=event_id, status=status),
            page,
            limit,
            with_stats=True,
        )
        Logger.base.info(
            f'📋 [ADMIN-BOOKINGS] {len(booking_page.bookings)}/{booking_page.pagination.total} '
            f'bookings (status={status}, event={event_id}, user={user_id})'
        )
        return booking_page
