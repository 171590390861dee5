"""Train Booking Domain Enums"""

from src.service.train_booking.domain.enum.booking_status import BookingStatus
from src.service.train_booking.domain.enum.train_type import TrainType

__all__ = ['BookingStatus', 'TrainType']
