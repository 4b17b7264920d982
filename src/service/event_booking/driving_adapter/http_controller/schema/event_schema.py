from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.event_booking.app.dto.pagination import Pagination
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_category import EventCategory


TIME_OF_DAY_REGEX = r'^([01]\d|2[0-3]):[0-5]\d$'


class EventCreateRequest(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    category: EventCategory
    location: str = Field(..., min_length=1, max_length=255)
    venue: str = Field(..., min_length=1, max_length=255)
    date: datetime
    time: str = Field(..., pattern=TIME_OF_DAY_REGEX)
    price: int = Field(..., ge=0)
    total_seats: int = Field(..., ge=1)
    image_url: Optional[str] = Field(None, max_length=500)

    class Config:
        json_schema_extra = {
            'example': {
                'title': 'PyCon Taiwan',
                'description': 'Annual Python community conference',
                'category': 'conference',
                'location': 'Taipei',
                'venue': 'Academia Sinica',
                'date': '2026-09-20T09:00:00Z',
                'time': '09:00',
                'price': 1500,
                'total_seats': 300,
                'image_url': None,
            }
        }


class EventUpdateRequest(BaseModel):
    """Descriptive fields only; seat counts change through bookings."""

    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    category: Optional[EventCategory] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    venue: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[datetime] = None
    time: Optional[str] = Field(None, pattern=TIME_OF_DAY_REGEX)
    price: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)

    class Config:
        extra = 'forbid'
        json_schema_extra = {'example': {'title': 'PyCon Taiwan 2026', 'price': 1800}}


class EventResponse(BaseModel):
    id: int
    title: str
    description: str
    category: str
    location: str
    venue: str
    date: datetime
    time: str
    price: int
    total_seats: int
    available_seats: int
    image_url: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            'example': {
                'id': 1,
                'title': 'PyCon Taiwan',
                'description': 'Annual Python community conference',
                'category': 'conference',
                'location': 'Taipei',
                'venue': 'Academia Sinica',
                'date': '2026-09-20T09:00:00Z',
                'time': '09:00',
                'price': 1500,
                'total_seats': 300,
                'available_seats': 298,
                'image_url': None,
                'created_by': 1,
            }
        }

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        if event.id is None:
            raise ValueError('Event ID should not be None after persistence.')
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            category=event.category.value,
            location=event.location,
            venue=event.venue,
            date=event.date,
            time=event.time,
            price=event.price,
            total_seats=event.total_seats,
            available_seats=event.available_seats,
            image_url=event.image_url,
            created_by=event.created_by,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def from_dto(cls, pagination: Pagination) -> 'PaginationResponse':
        return cls(
            page=pagination.page,
            limit=pagination.limit,
            total=pagination.total,
            pages=pagination.pages,
        )


class EventListResponse(BaseModel):
    events: List[EventResponse]
    pagination: PaginationResponse


class EventDeleteResponse(BaseModel):
    id: int
    deleted: bool

    class Config:
        json_schema_extra = {'example': {'id': 1, 'deleted': True}}
