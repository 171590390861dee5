"""
Notification Dispatcher

Best-effort side channel between the booking use cases and the
notification sender.

Architecture:
- Use case commits → dispatch(event) → bounded memory stream → run() worker → sender
- dispatch() never blocks and never raises: a full or closed stream drops the event
- open() then run() in each app lifespan task group; close() ends that lifespan's stream
- sender failures are logged and never stop the worker
"""

from anyio import BrokenResourceError, ClosedResourceError, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.train_booking.app.interface.i_notification_sender import INotificationSender
from src.service.train_booking.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
    BookingConfirmedEvent,
    BookingNotificationEvent,
)


class NotificationDispatcherImpl(INotificationDispatcher):
    def __init__(self, *, sender: INotificationSender, max_buffer_size: int = 1000) -> None:
        self.sender = sender
        self.max_buffer_size = max_buffer_size
        self._send_stream: MemoryObjectSendStream[BookingNotificationEvent]
        self._receive_stream: MemoryObjectReceiveStream[BookingNotificationEvent]
        self._closed = True
        self.open()

    def open(self) -> None:
        """Start a new stream pair if the previous one was closed."""
        if not self._closed:
            return
        self._send_stream, self._receive_stream = create_memory_object_stream[
            BookingNotificationEvent
        ](max_buffer_size=self.max_buffer_size)
        self._closed = False

    def dispatch(self, *, event: BookingNotificationEvent) -> bool:
        try:
            self._send_stream.send_nowait(event)
            return True
        except WouldBlock:
            Logger.base.warning(
                f'⚠️ [NOTIFY] Queue full, dropping {type(event).__name__} '
                f'for PNR {event.reservation_code}'
            )
        except (ClosedResourceError, BrokenResourceError):
            Logger.base.warning(
                f'⚠️ [NOTIFY] Dispatcher closed, dropping {type(event).__name__} '
                f'for PNR {event.reservation_code}'
            )
        return False

    async def deliver(self, event: BookingNotificationEvent) -> None:
        if isinstance(event, BookingConfirmedEvent):
            await self.sender.send_booking_confirmation(
                to=event.passenger_email,
                passenger_name=event.passenger_name,
                reservation_code=event.reservation_code,
                trip_summary=event.trip_summary,
            )
        elif isinstance(event, BookingCancelledEvent):
            await self.sender.send_cancellation(
                to=event.passenger_email,
                passenger_name=event.passenger_name,
                reservation_code=event.reservation_code,
            )

    async def run(self) -> None:
        """Drain the queue until close(); one failed delivery never stops the worker."""
        Logger.base.info('📨 [NOTIFY] Worker started')
        async with self._receive_stream:
            async for event in self._receive_stream:
                try:
                    await self.deliver(event)
                except Exception as e:
                    Logger.base.error(
                        f'❌ [NOTIFY] Failed to deliver {type(event).__name__} '
                        f'for PNR {event.reservation_code}: {type(e).__name__}: {e}'
                    )
        Logger.base.info('📨 [NOTIFY] Worker stopped')

    async def close(self) -> None:
        self._closed = True
        await self._send_stream.aclose()
