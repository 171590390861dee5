from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.dto.booking_record import BookingRecord
from src.service.train_booking.app.interface.i_booking_ledger import IBookingLedger
from src.service.train_booking.app.interface.i_schedule_catalog import IScheduleCatalog
from src.service.train_booking.domain.entity.booking_entity import Booking


class GetBookingUseCase:
    def __init__(
        self, *, booking_ledger: IBookingLedger, schedule_catalog: IScheduleCatalog
    ) -> None:
        self.booking_ledger = booking_ledger
        self.schedule_catalog = schedule_catalog

    @classmethod
    @inject
    def depends(
        cls,
        booking_ledger: IBookingLedger = Depends(Provide[Container.booking_ledger]),
        schedule_catalog: IScheduleCatalog = Depends(Provide[Container.schedule_catalog]),
    ) -> Self:
        return cls(booking_ledger=booking_ledger, schedule_catalog=schedule_catalog)

    async def _to_record(self, booking: Booking) -> BookingRecord:
        schedule = await self.schedule_catalog.find_by_id(schedule_id=booking.schedule_id)
        return BookingRecord.from_booking(booking=booking, schedule=schedule)

    @Logger.io
    async def get_booking(self, *, booking_id: int) -> BookingRecord:
        booking = await self.booking_ledger.find_by_id(booking_id=booking_id)
        return await self._to_record(booking)

    @Logger.io
    async def get_booking_by_code(self, *, reservation_code: str) -> BookingRecord:
        booking = await self.booking_ledger.find_by_code(
            reservation_code=reservation_code.strip().upper()
        )
        return await self._to_record(booking)

    @Logger.io
    async def list_bookings(self) -> List[BookingRecord]:
        bookings = await self.booking_ledger.find_all()
        schedules = await self.schedule_catalog.find_by_ids(
            schedule_ids=[booking.schedule_id for booking in bookings]
        )
        return [
            BookingRecord.from_booking(booking=booking, schedule=schedules[booking.schedule_id])
            for booking in bookings
        ]
