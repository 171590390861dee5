from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.dto.booking_record import BookingRecord
from src.service.train_booking.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.train_booking.domain.booking_errors import (
    CapacityExceededError,
    SeatsUnavailableError,
)
from src.service.train_booking.domain.domain_event.booking_domain_event import (
    BookingConfirmedEvent,
)
from src.service.train_booking.domain.entity.booking_entity import Booking
from src.service.train_booking.domain.reservation_code_generator import ReservationCodeGenerator


class CreateBookingUseCase:
    """
    Reserve seats on a schedule and record a confirmed booking.

    Flow (one unit of work):
    1. Load schedule (ScheduleNotFoundError)
    2. Fail fast if available_seats < seat_count (SeatsUnavailableError)
    3. Draw a reservation code unused in the ledger
    4. Persist the confirmed booking (total_amount = fare × seat_count)
    5. Take the seats: adjust_availability(-seat_count)
    6. Commit, then hand a confirmation to the notification dispatcher

    A concurrent caller may take the seats between 2 and 5; the adjustment
    then fails and the whole unit is rolled back, so no booking is left
    without its seats.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        code_generator: ReservationCodeGenerator,
        notification_dispatcher: INotificationDispatcher,
    ) -> None:
        self.uow = uow
        self.code_generator = code_generator
        self.notification_dispatcher = notification_dispatcher

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        code_generator: ReservationCodeGenerator = Depends(
            Provide[Container.reservation_code_generator]
        ),
        notification_dispatcher: INotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            code_generator=code_generator,
            notification_dispatcher=notification_dispatcher,
        )

    @Logger.io
    async def execute(
        self,
        *,
        schedule_id: int,
        passenger_name: str,
        passenger_email: str,
        passenger_phone: Optional[str] = None,
        seat_count: int,
    ) -> BookingRecord:
        async with self.uow:
            schedule = await self.uow.schedule_catalog.find_by_id(schedule_id=schedule_id)
            if not schedule.can_accommodate(seat_count):
                raise SeatsUnavailableError(
                    requested=seat_count, available=schedule.available_seats
                )

            async def _code_taken(code: str) -> bool:
                return await self.uow.booking_ledger.exists_by_code(reservation_code=code)

            reservation_code = await self.code_generator.generate_unique(_code_taken)

            booking = Booking.create(
                schedule=schedule,
                reservation_code=reservation_code,
                passenger_name=passenger_name,
                passenger_email=passenger_email,
                passenger_phone=passenger_phone,
                seat_count=seat_count,
            )
            booking = await self.uow.booking_ledger.create(booking=booking)

            try:
                schedule = await self.uow.schedule_catalog.adjust_availability(
                    schedule_id=schedule_id, delta=-seat_count
                )
            except CapacityExceededError as e:
                raise SeatsUnavailableError(requested=seat_count, available=e.available) from e

            await self.uow.commit()

        Logger.base.info(
            f'✅ [CREATE-BOOKING] PNR {booking.reservation_code}: {seat_count} seat(s) '
            f'on schedule {schedule_id}, {schedule.available_seats} left'
        )
        self.notification_dispatcher.dispatch(
            event=BookingConfirmedEvent.from_booking(booking=booking, schedule=schedule)
        )
        return BookingRecord.from_booking(booking=booking, schedule=schedule)
