from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.interface.i_booking_ledger import IBookingLedger
from src.service.train_booking.domain.booking_errors import (
    BookingNotFoundError,
    ConcurrencyConflictError,
)
from src.service.train_booking.domain.entity.booking_entity import Booking
from src.service.train_booking.domain.enum.booking_status import BookingStatus
from src.service.train_booking.driven_adapter.model.booking_model import BookingModel


class BookingLedgerImpl(IBookingLedger):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # SQLite drops the offset on DateTime(timezone=True); stored values are UTC
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value

    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        return Booking(
            id=db_booking.id,
            schedule_id=db_booking.schedule_id,
            reservation_code=db_booking.reservation_code,
            passenger_name=db_booking.passenger_name,
            passenger_email=db_booking.passenger_email,
            passenger_phone=db_booking.passenger_phone,
            seat_count=db_booking.seat_count,
            total_amount=db_booking.total_amount,
            status=BookingStatus(db_booking.status),
            created_at=BookingLedgerImpl._as_utc(db_booking.created_at),
            updated_at=BookingLedgerImpl._as_utc(db_booking.updated_at),
        )

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        now = datetime.now(timezone.utc)
        async with self._get_session() as session:
            db_booking = BookingModel(
                reservation_code=booking.reservation_code,
                schedule_id=booking.schedule_id,
                passenger_name=booking.passenger_name,
                passenger_email=booking.passenger_email,
                passenger_phone=booking.passenger_phone,
                seat_count=booking.seat_count,
                total_amount=booking.total_amount,
                status=booking.status.value,
                created_at=booking.created_at or now,
                updated_at=booking.updated_at or now,
            )
            session.add(db_booking)
            try:
                await session.flush()
            except IntegrityError as e:
                # Only unique column besides the PK: a concurrent booking took the same code
                raise ConcurrencyConflictError(
                    f'Reservation code {booking.reservation_code} was taken concurrently, please retry'
                ) from e
            return self._to_entity(db_booking)

    @Logger.io
    async def find_by_id(self, *, booking_id: int, for_update: bool = False) -> Booking:
        stmt = (
            select(BookingModel)
            .where(BookingModel.id == booking_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        async with self._get_session() as session:
            result = await session.execute(stmt)
            db_booking = result.scalar_one_or_none()
            if db_booking is None:
                raise BookingNotFoundError(booking_id=booking_id)
            return self._to_entity(db_booking)

    @Logger.io
    async def find_by_code(self, *, reservation_code: str) -> Booking:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.reservation_code == reservation_code)
            )
            db_booking = result.scalar_one_or_none()
            if db_booking is None:
                raise BookingNotFoundError(reservation_code=reservation_code)
            return self._to_entity(db_booking)

    @Logger.io
    async def exists_by_code(self, *, reservation_code: str) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                select(exists().where(BookingModel.reservation_code == reservation_code))
            )
            return bool(result.scalar())

    @Logger.io
    async def find_all(self) -> List[Booking]:
        async with self._get_session() as session:
            result = await session.execute(select(BookingModel).order_by(BookingModel.id))
            return [self._to_entity(db_booking) for db_booking in result.scalars().all()]

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            result = await session.execute(
                update(BookingModel)
                .where(BookingModel.id == booking.id)
                .values(
                    passenger_name=booking.passenger_name,
                    passenger_email=booking.passenger_email,
                    passenger_phone=booking.passenger_phone,
                    seat_count=booking.seat_count,
                    total_amount=booking.total_amount,
                    status=booking.status.value,
                    updated_at=booking.updated_at or datetime.now(timezone.utc),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise BookingNotFoundError(booking_id=booking.id)
            return booking
