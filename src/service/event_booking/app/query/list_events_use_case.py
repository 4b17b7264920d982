from datetime import datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.dto.event_view import EventFilter, EventPage
from src.service.event_booking.app.dto.pagination import Pagination, clamp_page
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo


class ListEventsUseCase:
    def __init__(self, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @Logger.io
    async def list_events(
        self,
        *,
        category: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
        include_past: bool = False,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
    ) -> EventPage:
        page, limit = clamp_page(page, limit)
        events, total = await self.event_query_repo.list_events(
            event_filter=EventFilter(
                now=datetime.now(timezone.utc),
                category=category,
                location=location,
                search=search.strip() if search else None,
                include_past=include_past,
            ),
            offset=(page - 1) * limit,
            limit=limit,
        )
        Logger.base.info(f'🌟 [LIST-EVENTS] Found {total} events (page {page})')
        return EventPage(events=events, pagination=Pagination(page=page, limit=limit, total=total))

    @Logger.io
    async def list_categories(self) -> List[str]:
        return await self.event_query_repo.list_categories()

    @Logger.io
    async def list_locations(self) -> List[str]:
        return await self.event_query_repo.list_locations()
