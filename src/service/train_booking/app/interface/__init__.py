"""Application layer interfaces (Ports)"""

from src.service.train_booking.app.interface.i_booking_ledger import IBookingLedger
from src.service.train_booking.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.train_booking.app.interface.i_notification_sender import INotificationSender
from src.service.train_booking.app.interface.i_schedule_catalog import IScheduleCatalog

__all__ = [
    'IBookingLedger',
    'INotificationDispatcher',
    'INotificationSender',
    'IScheduleCatalog',
]
