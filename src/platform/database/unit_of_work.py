"""
Unit of Work Pattern - one database transaction shared by every repository

Architecture:
- UoW owns the session lifecycle (open on enter, close on exit)
- UoW owns commit/rollback; anything not committed is rolled back on exit
- Repositories receive the shared session from the UoW
- Use cases coordinate the Event and Booking stores through one UoW
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Callable, Optional

import anyio
from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.event_booking.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
    from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Event and Booking stores

    Usage:
        async with uow:
            event = await uow.event_command_repo.decrement_available_seats(...)
            booking = await uow.booking_command_repo.create(booking=...)
            await uow.commit()
    """

    # Booking store
    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo

    # Event store
    event_command_repo: IEventCommandRepo
    event_query_repo: IEventQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh session is opened on every `async with`, so a use case that
    retries simply enters a new UoW.
    """

    def __init__(
        self, session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self.session_factory = session_factory
        self._session_cm: Optional[AbstractAsyncContextManager[AsyncSession]] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.event_booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.event_booking.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.event_booking.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from src.service.event_booking.driven_adapter.repo.event_query_repo_impl import (
            EventQueryRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Repositories share the UoW session
        self.booking_command_repo = BookingCommandRepoImpl()
        self.booking_command_repo.session = self.session
        self.booking_query_repo = BookingQueryRepoImpl(session_factory=None)
        self.booking_query_repo.session = self.session

        self.event_command_repo = EventCommandRepoImpl()
        self.event_command_repo.session = self.session
        self.event_query_repo = EventQueryRepoImpl(session_factory=None)
        self.event_query_repo.session = self.session

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        # Shielded: a timed-out unit of work must still release its transaction
        with anyio.CancelScope(shield=True):
            try:
                await super().__aexit__(*args)
            finally:
                if self._session_cm is not None:
                    await self._session_cm.__aexit__(*args)
                self._session_cm = None
                self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'UoW used outside of `async with`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
