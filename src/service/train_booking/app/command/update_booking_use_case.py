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
    BookingCancelledEvent,
)
from src.service.train_booking.domain.enum.booking_status import BookingStatus


class UpdateBookingUseCase:
    """
    Patch a confirmed booking: passenger details, seat count, or status.

    Flow (one unit of work, booking row locked):
    1. Load booking FOR UPDATE (BookingNotFoundError)
    2. Cancelled bookings are immutable (InvalidTransitionError)
    3. Apply the provided passenger fields
    4. status=cancelled: cancel and release every seat; seat_count is ignored
       seat_count changed: diff = new - old; take or release diff seats and reprice
    5. Persist and commit; any failure rolls back booking and inventory together
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        notification_dispatcher: INotificationDispatcher,
    ) -> None:
        self.uow = uow
        self.notification_dispatcher = notification_dispatcher

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        notification_dispatcher: INotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
    ) -> Self:
        return cls(uow=uow, notification_dispatcher=notification_dispatcher)

    @Logger.io
    async def execute(
        self,
        *,
        booking_id: int,
        passenger_name: Optional[str] = None,
        passenger_email: Optional[str] = None,
        passenger_phone: Optional[str] = None,
        seat_count: Optional[int] = None,
        status: Optional[BookingStatus] = None,
    ) -> BookingRecord:
        cancelling = status == BookingStatus.CANCELLED

        async with self.uow:
            booking = await self.uow.booking_ledger.find_by_id(
                booking_id=booking_id, for_update=True
            )
            booking.ensure_modifiable()
            booking = booking.update_passenger(
                passenger_name=passenger_name,
                passenger_email=passenger_email,
                passenger_phone=passenger_phone,
            )
            schedule = await self.uow.schedule_catalog.find_by_id(schedule_id=booking.schedule_id)

            if cancelling:
                booking = booking.cancel()
                schedule = await self.uow.schedule_catalog.adjust_availability(
                    schedule_id=booking.schedule_id, delta=booking.seat_count
                )
            elif seat_count is not None and seat_count != booking.seat_count:
                diff = seat_count - booking.seat_count
                if diff > 0 and not schedule.can_accommodate(diff):
                    raise SeatsUnavailableError(requested=diff, available=schedule.available_seats)
                try:
                    schedule = await self.uow.schedule_catalog.adjust_availability(
                        schedule_id=booking.schedule_id, delta=-diff
                    )
                except CapacityExceededError as e:
                    raise SeatsUnavailableError(requested=diff, available=e.available) from e
                booking = booking.change_seat_count(seat_count=seat_count, fare=schedule.fare)

            booking = await self.uow.booking_ledger.update(booking=booking)
            await self.uow.commit()

        Logger.base.info(
            f'✏️ [UPDATE-BOOKING] PNR {booking.reservation_code}: status={booking.status}, '
            f'seats={booking.seat_count}'
        )
        if cancelling:
            self.notification_dispatcher.dispatch(
                event=BookingCancelledEvent.from_booking(booking=booking)
            )
        return BookingRecord.from_booking(booking=booking, schedule=schedule)
