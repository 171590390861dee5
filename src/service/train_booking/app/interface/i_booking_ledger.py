from abc import ABC, abstractmethod
from typing import List

from src.service.train_booking.domain.entity.booking_entity import Booking


class IBookingLedger(ABC):
    """Repository interface for bookings"""

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """Assign an id and persist. Raises ConcurrencyConflictError on a duplicate code"""
        pass

    @abstractmethod
    async def find_by_id(self, *, booking_id: int, for_update: bool = False) -> Booking:
        """Raises BookingNotFoundError. for_update locks the row until the transaction ends"""
        pass

    @abstractmethod
    async def find_by_code(self, *, reservation_code: str) -> Booking:
        """Raises BookingNotFoundError"""
        pass

    @abstractmethod
    async def exists_by_code(self, *, reservation_code: str) -> bool:
        pass

    @abstractmethod
    async def find_all(self) -> List[Booking]:
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        """Raises BookingNotFoundError"""
        pass
