from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.dto.booking_record import BookingRecord
from src.service.train_booking.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.train_booking.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
)


class CancelBookingUseCase:
    """
    Cancel a confirmed booking and return its seats to the schedule.

    Flow (one unit of work, booking row locked):
    1. Load booking FOR UPDATE (BookingNotFoundError)
    2. Mark cancelled (AlreadyCancelledError if it already is)
    3. Persist, release seats: adjust_availability(+seat_count)
    4. Commit, then hand a cancellation notice to the notification dispatcher
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
    async def execute(self, *, booking_id: int) -> BookingRecord:
        async with self.uow:
            booking = await self.uow.booking_ledger.find_by_id(
                booking_id=booking_id, for_update=True
            )
            booking = booking.cancel()
            booking = await self.uow.booking_ledger.update(booking=booking)
            schedule = await self.uow.schedule_catalog.adjust_availability(
                schedule_id=booking.schedule_id, delta=booking.seat_count
            )
            await self.uow.commit()

        Logger.base.info(
            f'🛑 [CANCEL-BOOKING] PNR {booking.reservation_code}: released {booking.seat_count} '
            f'seat(s) on schedule {booking.schedule_id}'
        )
        self.notification_dispatcher.dispatch(
            event=BookingCancelledEvent.from_booking(booking=booking)
        )
        return BookingRecord.from_booking(booking=booking, schedule=schedule)
