from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.query.admin_stats_use_case import AdminStatsUseCase
from src.service.event_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.event_booking.domain.entity.booking_entity import BookingStatus
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)
from src.service.event_booking.driving_adapter.http_controller.schema.booking_schema import (
    AdminBookingListResponse,
    DashboardStatsResponse,
)


router = APIRouter()


@router.get('/bookings', status_code=status.HTTP_200_OK)
@Logger.io
async def list_all_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias='status'),
    event_id: Optional[int] = None,
    user_id: Optional[int] = None,
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    current_user: UserEntity = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> AdminBookingListResponse:
    booking_page = await use_case.list_all_bookings(
        status=booking_status, event_id=event_id, user_id=user_id, page=page, limit=limit
    )
    return AdminBookingListResponse.from_page(booking_page)


@router.get('/stats', status_code=status.HTTP_200_OK)
@Logger.io
async def get_dashboard_stats(
    current_user: UserEntity = Depends(require_admin),
    use_case: AdminStatsUseCase = Depends(AdminStatsUseCase.depends),
) -> DashboardStatsResponse:
    stats = await use_case.get_dashboard_stats()
    return DashboardStatsResponse(
        total_events=stats.total_events,
        upcoming_events=stats.upcoming_events,
        total_users=stats.total_users,
        total_bookings=stats.total_bookings,
        confirmed_bookings=stats.confirmed_bookings,
        cancelled_bookings=stats.cancelled_bookings,
        total_revenue=stats.total_revenue,
        seats_sold=stats.seats_sold,
    )
