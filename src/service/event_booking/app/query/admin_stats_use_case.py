from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.dto.booking_view import BookingFilter
from src.service.event_booking.app.dto.dashboard_stats import DashboardStats
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_booking.domain.entity.booking_entity import BookingStatus


class AdminStatsUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        booking_query_repo: IBookingQueryRepo,
        user_query_repo: IUserQueryRepo,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.booking_query_repo = booking_query_repo
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            booking_query_repo=booking_query_repo,
            user_query_repo=user_query_repo,
        )

    @Logger.io
    async def get_dashboard_stats(self) -> DashboardStats:
        now = datetime.now(timezone.utc)
        stats = {
            row.status: row
            for row in await self.booking_query_repo.stats_by_status(
                booking_filter=BookingFilter()
            )
        }
        confirmed = stats.get(BookingStatus.CONFIRMED)
        cancelled = stats.get(BookingStatus.CANCELLED)

        return DashboardStats(
            total_events=await self.event_query_repo.count_events(),
            upcoming_events=await self.event_query_repo.count_events(upcoming_after=now),
            total_users=await self.user_query_repo.count_users(),
            total_bookings=sum(row.count for row in stats.values()),
            confirmed_bookings=confirmed.count if confirmed else 0,
            cancelled_bookings=cancelled.count if cancelled else 0,
            # Revenue and seats sold come from confirmed bookings only
            total_revenue=confirmed.total_revenue if confirmed else 0,
            seats_sold=confirmed.total_seats if confirmed else 0,
        )
