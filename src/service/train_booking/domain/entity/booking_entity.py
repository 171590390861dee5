from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.domain.booking_errors import (
    AlreadyCancelledError,
    InvalidTransitionError,
)
from src.service.train_booking.domain.entity.schedule_entity import Schedule
from src.service.train_booking.domain.enum.booking_status import BookingStatus


MIN_SEATS_PER_BOOKING = 1


@attrs.define
class Booking:
    schedule_id: int
    reservation_code: str
    passenger_name: str
    passenger_email: str
    seat_count: int
    total_amount: Decimal
    passenger_phone: Optional[str] = None
    status: BookingStatus = BookingStatus.CONFIRMED
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        schedule: Schedule,
        reservation_code: str,
        passenger_name: str,
        passenger_email: str,
        passenger_phone: Optional[str] = None,
        seat_count: int,
    ) -> 'Booking':
        if schedule.id is None:
            raise DomainError('Schedule must be persisted before booking')
        if seat_count < MIN_SEATS_PER_BOOKING:
            raise DomainError(f'Seat count must be at least {MIN_SEATS_PER_BOOKING}')

        now = datetime.now(timezone.utc)
        return cls(
            schedule_id=schedule.id,
            reservation_code=reservation_code,
            passenger_name=passenger_name,
            passenger_email=passenger_email,
            passenger_phone=passenger_phone,
            seat_count=seat_count,
            total_amount=schedule.price_for(seat_count),
            status=BookingStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    def ensure_modifiable(self) -> None:
        """
        Raises:
            InvalidTransitionError: booking is cancelled (terminal state)
        """
        if self.is_cancelled:
            raise InvalidTransitionError()

    @Logger.io
    def update_passenger(
        self,
        *,
        passenger_name: Optional[str] = None,
        passenger_email: Optional[str] = None,
        passenger_phone: Optional[str] = None,
    ) -> 'Booking':
        """Apply only the provided passenger fields."""
        self.ensure_modifiable()
        changes = {
            key: value
            for key, value in (
                ('passenger_name', passenger_name),
                ('passenger_email', passenger_email),
                ('passenger_phone', passenger_phone),
            )
            if value is not None
        }
        if not changes:
            return self
        return attrs.evolve(self, **changes, updated_at=datetime.now(timezone.utc))

    @Logger.io
    def change_seat_count(self, *, seat_count: int, fare: Decimal) -> 'Booking':
        """Set a new seat count and reprice it at the schedule's fare."""
        self.ensure_modifiable()
        if seat_count < MIN_SEATS_PER_BOOKING:
            raise DomainError(f'Seat count must be at least {MIN_SEATS_PER_BOOKING}')
        return attrs.evolve(
            self,
            seat_count=seat_count,
            total_amount=fare * seat_count,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def cancel(self) -> 'Booking':
        """
        Cancel booking; seat_count and total_amount are kept for the record.

        Raises:
            AlreadyCancelledError: booking is already cancelled
        """
        if self.is_cancelled:
            raise AlreadyCancelledError()
        return attrs.evolve(
            self, status=BookingStatus.CANCELLED, updated_at=datetime.now(timezone.utc)
        )
