from abc import ABC, abstractmethod

from src.service.train_booking.domain.domain_event.booking_domain_event import (
    BookingNotificationEvent,
)


class INotificationDispatcher(ABC):
    """Fire-and-forget hand-off of booking events; never raises into the caller"""

    @abstractmethod
    def dispatch(self, *, event: BookingNotificationEvent) -> bool:
        """Returns False when the event was dropped"""
        pass
