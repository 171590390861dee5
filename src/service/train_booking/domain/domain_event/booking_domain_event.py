"""
Booking Domain Events

Raised by the booking use cases after their transaction commits and
handed to the notification dispatcher. Delivery is best-effort.
"""

import attrs

from src.service.train_booking.domain.entity.booking_entity import Booking
from src.service.train_booking.domain.entity.schedule_entity import Schedule


@attrs.define(frozen=True)
class BookingConfirmedEvent:
    booking_id: int
    reservation_code: str
    passenger_name: str
    passenger_email: str
    trip_summary: str

    @classmethod
    def from_booking(cls, *, booking: Booking, schedule: Schedule) -> 'BookingConfirmedEvent':
        assert booking.id is not None, 'Booking must be persisted before confirming'
        return cls(
            booking_id=booking.id,
            reservation_code=booking.reservation_code,
            passenger_name=booking.passenger_name,
            passenger_email=booking.passenger_email,
            trip_summary=schedule.trip_summary(),
        )


@attrs.define(frozen=True)
class BookingCancelledEvent:
    booking_id: int
    reservation_code: str
    passenger_name: str
    passenger_email: str

    @classmethod
    def from_booking(cls, *, booking: Booking) -> 'BookingCancelledEvent':
        assert booking.id is not None, 'Booking must be persisted before cancelling'
        return cls(
            booking_id=booking.id,
            reservation_code=booking.reservation_code,
            passenger_name=booking.passenger_name,
            passenger_email=booking.passenger_email,
        )


BookingNotificationEvent = BookingConfirmedEvent | BookingCancelledEvent
