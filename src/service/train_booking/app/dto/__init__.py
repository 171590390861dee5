"""Application layer DTOs"""

from src.service.train_booking.app.dto.booking_record import BookingRecord, TripView

__all__ = [
    'BookingRecord',
    'TripView',
]
