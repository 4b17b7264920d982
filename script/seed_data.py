#!/usr/bin/env python3
"""
Database Seed Script
Recreate the schema and populate demo data

Features:
1. Create Users - 1 admin + 3 regular users
2. Create Events - a small catalogue across categories and cities
3. Create Bookings - a few confirmed bookings and one cancellation

Notes:
- All writes go through the use cases, so seat counts stay consistent
- Existing tables are dropped first; do not run against production data
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from src.platform.config.di import container
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    drop_db_and_tables,
)
from src.service.event_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.event_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.event_booking.app.command.create_event_use_case import CreateEventUseCase
from src.service.event_booking.app.command.user_use_case import UserUseCase
from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole

DEFAULT_PASSWORD = 'P@ssw0rd'


@dataclass
class UserConfig:
    """User seed configuration"""

    email: str
    name: str
    role: UserRole


@dataclass
class EventConfig:
    """Event seed configuration; date is days from now"""

    title: str
    description: str
    category: str
    location: str
    venue: str
    days_ahead: int
    time: str
    price: int
    total_seats: int


TEST_USERS = [
    UserConfig(email='admin@eventbooking.com', name='Admin User', role=UserRole.ADMIN),
    UserConfig(email='john@example.com', name='John Doe', role=UserRole.USER),
    UserConfig(email='jane@example.com', name='Jane Smith', role=UserRole.USER),
    UserConfig(email='mike@example.com', name='Mike Johnson', role=UserRole.USER),
]

TEST_EVENTS = [
    EventConfig(
        title='Tech Conference',
        description='Annual technology conference on AI, ML and web development.',
        category='conference',
        location='Taipei',
        venue='Taipei International Convention Center',
        days_ahead=30,
        time='09:00',
        price=25000,
        total_seats=500,
    ),
    EventConfig(
        title='Python Workshop',
        description='Hands-on workshop on async Python and modern web frameworks.',
        category='workshop',
        location='Taichung',
        venue='Taichung Tech Hub',
        days_ahead=45,
        time='10:00',
        price=15000,
        total_seats=50,
    ),
    EventConfig(
        title='Jazz Under the Stars',
        description='An evening of live jazz in the open air with local bands.',
        category='concert',
        location='Kaohsiung',
        venue='Pier-2 Art Center',
        days_ahead=14,
        time='19:30',
        price=5000,
        total_seats=200,
    ),
    EventConfig(
        title='Startup Networking Night',
        description='Meet founders, investors and engineers from the local startup scene.',
        category='networking',
        location='Taipei',
        venue='Songshan Cultural Park',
        days_ahead=7,
        time='18:00',
        price=0,
        total_seats=80,
    ),
]

# (user email, event title, seats)
TEST_BOOKINGS = [
    ('john@example.com', 'Tech Conference', 2),
    ('jane@example.com', 'Tech Conference', 1),
    ('jane@example.com', 'Jazz Under the Stars', 4),
    ('mike@example.com', 'Python Workshop', 1),
]
CANCELLED_BOOKING = ('mike@example.com', 'Startup Networking Night', 3)


def _user_use_case() -> UserUseCase:
    return UserUseCase(
        user_command_repo=container.user_command_repo(),
        user_query_repo=container.user_query_repo(),
        password_hasher=container.password_hasher(),
    )


async def create_users() -> dict[str, UserEntity]:
    print(f'👥 Creating {len(TEST_USERS)} users...')
    use_case = _user_use_case()
    users = {}
    for config in TEST_USERS:
        user = await use_case.create_user(
            email=config.email, password=DEFAULT_PASSWORD, name=config.name, role=config.role
        )
        users[user.email] = user
        print(f'   ✅ Created {config.role.value}: ID={user.id}, Email={user.email}')
    print(f'   📧 Credentials: {DEFAULT_PASSWORD}')
    return users


async def create_events(admin_id: int) -> dict[str, int]:
    print(f'🎪 Creating {len(TEST_EVENTS)} events...')
    use_case = CreateEventUseCase(uow_factory=container.unit_of_work)
    today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    event_ids = {}
    for config in TEST_EVENTS:
        hour, minute = (int(part) for part in config.time.split(':'))
        event = await use_case.create_event(
            created_by=admin_id,
            title=config.title,
            description=config.description,
            category=config.category,
            location=config.location,
            venue=config.venue,
            date=today + timedelta(days=config.days_ahead, hours=hour, minutes=minute),
            time=config.time,
            price=config.price,
            total_seats=config.total_seats,
        )
        event_ids[event.title] = event.id or 0
        print(f'   ✅ Created event: ID={event.id}, Title={event.title}, Seats={event.total_seats}')
    return event_ids


async def create_bookings(users: dict[str, UserEntity], event_ids: dict[str, int]) -> None:
    print(f'🎟️ Creating {len(TEST_BOOKINGS) + 1} bookings...')
    create_use_case = CreateBookingUseCase(uow_factory=container.unit_of_work)
    cancel_use_case = CancelBookingUseCase(uow_factory=container.unit_of_work)

    for email, title, seats in [*TEST_BOOKINGS, CANCELLED_BOOKING]:
        result = await create_use_case.create_booking(
            user_id=users[email].id or 0, event_id=event_ids[title], seats_requested=seats
        )
        print(
            f'   ✅ {email} booked {seats} for "{title}" '
            f'(total={result.booking.total_amount}, remaining={result.remaining_seats})'
        )

    # Last one is cancelled again so the stats show both statuses
    cancelled = await cancel_use_case.cancel_booking(
        user_id=result.booking.user_id, booking_id=result.booking.id
    )
    print(f'   ↩️ Cancelled booking {cancelled.booking.id}, released {cancelled.seats_released}')


async def _reset_schema() -> None:
    print('🧹 Recreating tables...')
    await drop_db_and_tables()
    await create_db_and_tables()


async def main():
    print('🌱 Starting data seeding...')
    print('=' * 50)
    container.config_service()

    try:
        await _reset_schema()
        users = await create_users()
        print()
        admin = users[TEST_USERS[0].email]
        event_ids = await create_events(admin.id or 0)
        print()
        await create_bookings(users, event_ids)

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print('📋 Test accounts:')
        for user in TEST_USERS:
            print(f'   {user.role.value.capitalize()}: {user.email} / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1) from e

    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
