"""
Unit of Work Pattern - one database transaction per booking operation

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories reach the shared session through the UoW
- Use cases coordinate schedule inventory and booking ledger through one UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


if TYPE_CHECKING:
    from src.service.train_booking.app.interface.i_booking_ledger import IBookingLedger
    from src.service.train_booking.app.interface.i_schedule_catalog import IScheduleCatalog


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Train Booking Service

    Usage:
        async with uow:
            await uow.schedule_catalog.adjust_availability(schedule_id=1, delta=-2)
            await uow.booking_ledger.create(booking=...)
            await uow.commit()

    Leaving the block without commit() rolls back.
    """

    schedule_catalog: IScheduleCatalog
    booking_ledger: IBookingLedger

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
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

    A fresh session is opened on enter and closed on exit; the DI container
    provides a new instance per use case call (Factory provider).
    """

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        seat_adjust_max_retries: int,
    ) -> None:
        self.session_factory = session_factory
        self.seat_adjust_max_retries = seat_adjust_max_retries
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.train_booking.driven_adapter.repo.booking_ledger_impl import (
            BookingLedgerImpl,
        )
        from src.service.train_booking.driven_adapter.repo.schedule_catalog_impl import (
            ScheduleCatalogImpl,
        )

        self.session = self.session_factory()

        # Repositories share the UoW session
        self.schedule_catalog = ScheduleCatalogImpl(
            session_factory=None, max_retries=self.seat_adjust_max_retries
        )
        self.schedule_catalog.session = self.session
        self.booking_ledger = BookingLedgerImpl(session_factory=None)
        self.booking_ledger.session = self.session

        return await super().__aenter__()

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'UnitOfWork used outside of its context'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
