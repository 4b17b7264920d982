from datetime import datetime, timezone
import re
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import InvalidRequestError, InvalidStateError
from src.service.event_booking.domain.enum.event_category import EventCategory


TIME_OF_DAY_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')

# Fields an admin may change after creation; seat counts move only through bookings
UPDATABLE_FIELDS = frozenset(
    {'title', 'description', 'category', 'location', 'venue', 'date', 'time', 'price', 'image_url'}
)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes (SQLite round-trips) are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Event {attribute.name} cannot be empty')


def _validate_time_of_day(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not TIME_OF_DAY_PATTERN.match(value):
        raise ValueError('Event time must be in HH:MM format')


@attrs.define
class EventEntity:
    title: str = attrs.field(validator=_validate_non_empty_string)
    description: str = attrs.field(validator=_validate_non_empty_string)
    category: EventCategory = attrs.field(converter=EventCategory)
    location: str = attrs.field(validator=_validate_non_empty_string)
    venue: str = attrs.field(validator=_validate_non_empty_string)
    date: datetime = attrs.field(converter=as_utc)
    time: str = attrs.field(validator=_validate_time_of_day)
    price: int = attrs.field(validator=attrs.validators.ge(0))
    total_seats: int = attrs.field(validator=attrs.validators.ge(1))
    available_seats: int = attrs.field()
    image_url: Optional[str] = None
    created_by: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @available_seats.validator
    def _check_available_seats(self, attribute: attrs.Attribute, value: int) -> None:
        if not 0 <= value <= self.total_seats:
            raise ValueError('available_seats must be between 0 and total_seats')

    @classmethod
    def create(
        cls,
        *,
        title: str,
        description: str,
        category: str,
        location: str,
        venue: str,
        date: datetime,
        time: str,
        price: int,
        total_seats: int,
        created_by: int,
        image_url: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> 'EventEntity':
        now = now or datetime.now(timezone.utc)
        if as_utc(date) <= now:
            raise InvalidRequestError('Event date must be in the future')

        return cls(
            title=title.strip(),
            description=description.strip(),
            category=category,
            location=location.strip(),
            venue=venue.strip(),
            date=date,
            time=time,
            price=price,
            total_seats=total_seats,
            available_seats=total_seats,
            image_url=image_url,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )

    def is_upcoming(self, now: datetime) -> bool:
        return self.date > now

    def ensure_bookable(self, now: datetime) -> None:
        if not self.is_upcoming(now):
            raise InvalidStateError('Cannot book past events')

    def update_details(self, *, now: Optional[datetime] = None, **changes: Any) -> 'EventEntity':
        """Return a copy with descriptive fields changed; seat counts are never touched here."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidRequestError(f'Fields cannot be updated: {", ".join(sorted(unknown))}')

        now = now or datetime.now(timezone.utc)
        if 'date' in changes and as_utc(changes['date']) <= now:
            raise InvalidRequestError('Event date must be in the future')

        return attrs.evolve(self, updated_at=now, **changes)
