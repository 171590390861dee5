"""
Read models returned by the use cases

Bookings and schedules are flattened together with the trip's train fields
so callers never need a second lookup.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.train_booking.domain.entity.booking_entity import Booking
from src.service.train_booking.domain.entity.schedule_entity import Schedule


@attrs.define(frozen=True)
class TripView:
    schedule_id: int
    train_number: str
    train_name: str
    train_type: Optional[str]
    departure_station: str
    arrival_station: str
    departure_date: str  # YYYY-MM-DD
    departure_time: str  # HH:MM
    arrival_time: str  # HH:MM
    fare: Decimal
    total_capacity: int
    available_seats: int

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> 'TripView':
        assert schedule.id is not None
        return cls(
            schedule_id=schedule.id,
            train_number=schedule.train_number,
            train_name=schedule.train_name,
            train_type=schedule.train_type.value if schedule.train_type else None,
            departure_station=schedule.departure_station,
            arrival_station=schedule.arrival_station,
            departure_date=schedule.departure_date.isoformat(),
            departure_time=schedule.departure_time.strftime('%H:%M'),
            arrival_time=schedule.arrival_time.strftime('%H:%M'),
            fare=schedule.fare,
            total_capacity=schedule.total_capacity,
            available_seats=schedule.available_seats,
        )


@attrs.define(frozen=True)
class BookingRecord:
    id: int
    schedule_id: int
    reservation_code: str
    passenger_name: str
    passenger_email: str
    passenger_phone: Optional[str]
    seat_count: int
    total_amount: Decimal
    status: str
    created_at: Optional[datetime]
    train_number: str
    train_name: str
    departure_station: str
    arrival_station: str
    departure_date: str  # YYYY-MM-DD
    departure_time: str  # HH:MM
    arrival_time: str  # HH:MM

    @classmethod
    def from_booking(cls, *, booking: Booking, schedule: Schedule) -> 'BookingRecord':
        assert booking.id is not None
        return cls(
            id=booking.id,
            schedule_id=booking.schedule_id,
            reservation_code=booking.reservation_code,
            passenger_name=booking.passenger_name,
            passenger_email=booking.passenger_email,
            passenger_phone=booking.passenger_phone,
            seat_count=booking.seat_count,
            total_amount=booking.total_amount,
            status=booking.status.value,
            created_at=booking.created_at,
            train_number=schedule.train_number,
            train_name=schedule.train_name,
            departure_station=schedule.departure_station,
            arrival_station=schedule.arrival_station,
            departure_date=schedule.departure_date.isoformat(),
            departure_time=schedule.departure_time.strftime('%H:%M'),
            arrival_time=schedule.arrival_time.strftime('%H:%M'),
        )
