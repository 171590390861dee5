from abc import ABC, abstractmethod


class INotificationSender(ABC):
    """Outbound passenger messages (email in the default adapter)"""

    @abstractmethod
    async def send_booking_confirmation(
        self, *, to: str, passenger_name: str, reservation_code: str, trip_summary: str
    ) -> None:
        pass

    @abstractmethod
    async def send_cancellation(self, *, to: str, passenger_name: str, reservation_code: str) -> None:
        pass
