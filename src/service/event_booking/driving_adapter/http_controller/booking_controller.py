from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Query, Response, status
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.event_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.event_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.event_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.event_booking.domain.entity.booking_entity import BookingStatus
from src.service.event_booking.driving_adapter.http_controller.auth.current_user_info import (
    CurrentUserInfo,
)
from src.service.event_booking.driving_adapter.http_controller.auth.role_auth import (
    require_user_info,
)
from src.service.event_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    BookingWithEventResponse,
    CancelBookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    response: Response,
    idempotency_key: Optional[str] = Header(None, alias='Idempotency-Key', max_length=128),
    current_user: CurrentUserInfo = Depends(require_user_info),
    booking_use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('seats_booked', request.seats_booked)
        span.set_attribute('user_id', current_user.user_id)

        # Header wins over the body field
        result = await booking_use_case.create_booking(
            user_id=current_user.user_id,
            event_id=request.event_id,
            seats_requested=request.seats_booked,
            idempotency_key=idempotency_key or request.idempotency_key,
        )

        if not result.created:
            response.status_code = status.HTTP_200_OK

        span.set_attribute('booking.id', str(result.booking.id))
        return BookingResponse.from_entity(result.booking)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias='status'),
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    current_user: CurrentUserInfo = Depends(require_user_info),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    booking_page = await use_case.list_user_bookings(
        user_id=current_user.user_id, status=booking_status, page=page, limit=limit
    )
    return BookingListResponse.from_page(booking_page)


@router.get('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_booking(
    booking_id: UUID,
    current_user: CurrentUserInfo = Depends(require_user_info),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingWithEventResponse:
    booking = await use_case.get_booking(booking_id=booking_id, user_id=current_user.user_id)
    return BookingWithEventResponse.from_dto(booking)


async def _cancel(
    booking_id: UUID, current_user: CurrentUserInfo, use_case: CancelBookingUseCase
) -> CancelBookingResponse:
    with tracer.start_as_current_span('controller.cancel_booking') as span:
        span.set_attribute('booking.id', str(booking_id))
        span.set_attribute('user_id', current_user.user_id)

        # Use case will raise exceptions for validation errors (Fail Fast)
        result = await use_case.cancel_booking(
            user_id=current_user.user_id, booking_id=booking_id
        )
        return CancelBookingResponse(
            id=result.booking.id,
            status=result.booking.status.value,
            seats_released=result.seats_released,
        )


@router.delete('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    current_user: CurrentUserInfo = Depends(require_user_info),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> CancelBookingResponse:
    return await _cancel(booking_id, current_user, use_case)


@router.post('/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking_action(
    booking_id: UUID,
    current_user: CurrentUserInfo = Depends(require_user_info),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> CancelBookingResponse:
    return await _cancel(booking_id, current_user, use_case)
