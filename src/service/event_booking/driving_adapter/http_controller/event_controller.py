from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.create_event_use_case import CreateEventUseCase
from src.service.event_booking.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.event_booking.app.command.update_event_use_case import UpdateEventUseCase
from src.service.event_booking.app.query.event_booking_stats_use_case import (
    EventBookingStatsUseCase,
)
from src.service.event_booking.app.query.get_event_use_case import GetEventUseCase
from src.service.event_booking.app.query.list_events_use_case import ListEventsUseCase
from src.service.event_booking.domain.entity.booking_entity import BookingStatus
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.driving_adapter.http_controller.auth.current_user_info import (
    CurrentUserInfo,
)
from src.service.event_booking.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
    require_admin_info,
)
from src.service.event_booking.driving_adapter.http_controller.schema.booking_schema import (
    AdminBookingResponse,
    BookingEventResponse,
    BookingStatsResponse,
    EventBookingsResponse,
)
from src.service.event_booking.driving_adapter.http_controller.schema.event_schema import (
    EventCreateRequest,
    EventDeleteResponse,
    EventListResponse,
    EventResponse,
    EventUpdateRequest,
    PaginationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: CurrentUserInfo = Depends(require_admin_info),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    with tracer.start_as_current_span('controller.create_event') as span:
        span.set_attribute('user.id', current_user.user_id)
        event = await use_case.create_event(
            created_by=current_user.user_id,
            title=request.title,
            description=request.description,
            category=request.category.value,
            location=request.location,
            venue=request.venue,
            date=request.date,
            time=request.time,
            price=request.price,
            total_seats=request.total_seats,
            image_url=request.image_url,
        )
        span.set_attribute('event.id', event.id or 0)
        return EventResponse.from_entity(event)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    category: Optional[str] = None,
    location: Optional[str] = None,
    search: Optional[str] = None,
    include_past: bool = False,
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> EventListResponse:
    event_page = await use_case.list_events(
        category=category,
        location=location,
        search=search,
        include_past=include_past,
        page=page,
        limit=limit,
    )
    return EventListResponse(
        events=[EventResponse.from_entity(event) for event in event_page.events],
        pagination=PaginationResponse.from_dto(event_page.pagination),
    )


# Static paths must be registered before /{event_id}


@router.get('/categories', status_code=status.HTTP_200_OK)
@Logger.io
async def list_categories(
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[str]:
    return await use_case.list_categories()


@router.get('/locations', status_code=status.HTTP_200_OK)
@Logger.io
async def list_locations(
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[str]:
    return await use_case.list_locations()


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event = await use_case.get_by_id(event_id=event_id)
    return EventResponse.from_entity(event)


@router.put('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_event(
    event_id: int,
    request: EventUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.update_event(
        event_id=event_id, changes=request.model_dump(exclude_unset=True)
    )
    return EventResponse.from_entity(event)


@router.delete('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_event(
    event_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> EventDeleteResponse:
    await use_case.delete_event(event_id=event_id)
    return EventDeleteResponse(id=event_id, deleted=True)


@router.get('/{event_id}/bookings', status_code=status.HTTP_200_OK)
@Logger.io
async def list_event_bookings(
    event_id: int,
    booking_status: Optional[BookingStatus] = Query(None, alias='status'),
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    current_user: UserEntity = Depends(require_admin),
    use_case: EventBookingStatsUseCase = Depends(EventBookingStatsUseCase.depends),
) -> EventBookingsResponse:
    report = await use_case.get_event_bookings(
        event_id=event_id, status=booking_status, page=page, limit=limit
    )
    return EventBookingsResponse(
        event=BookingEventResponse.from_dto(report.event),
        total_seats=report.total_seats,
        available_seats=report.available_seats,
        bookings=[AdminBookingResponse.from_dto(item) for item in report.page.bookings],
        pagination=PaginationResponse.from_dto(report.page.pagination),
        stats=[BookingStatsResponse.from_dto(row) for row in report.page.stats],
    )
