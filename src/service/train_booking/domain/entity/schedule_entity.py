from datetime import date, time
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.domain.booking_errors import CapacityExceededError
from src.service.train_booking.domain.entity.train_entity import Train
from src.service.train_booking.domain.enum.train_type import TrainType


@attrs.define
class Schedule:
    """
    One trip of a train on a date.

    available_seats is the trip's seat inventory: 0 <= available_seats <= total_capacity.
    train_number / train_name / train_type are read-only copies of the
    referenced Train, filled in by the catalog when it loads the schedule.
    """

    train_id: int
    departure_station: str
    arrival_station: str
    departure_date: date
    departure_time: time
    arrival_time: time
    fare: Decimal
    total_capacity: int
    available_seats: int
    id: Optional[int] = None
    version: int = 0
    train_number: str = ''
    train_name: str = ''
    train_type: Optional[TrainType] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        train: Train,
        departure_station: str,
        arrival_station: str,
        departure_date: date,
        departure_time: time,
        arrival_time: time,
        fare: Decimal,
        total_capacity: Optional[int] = None,
    ) -> 'Schedule':
        if train.id is None:
            raise DomainError('Train must be persisted before scheduling')
        departure_station = departure_station.strip()
        arrival_station = arrival_station.strip()
        if not departure_station or not arrival_station:
            raise DomainError('Departure and arrival stations are required')
        if departure_station == arrival_station:
            raise DomainError('Departure and arrival stations must differ')
        fare = Decimal(str(fare))
        if fare <= 0:
            raise DomainError('Fare must be positive')

        capacity = train.total_seats if total_capacity is None else total_capacity
        if capacity <= 0:
            raise DomainError('Total capacity must be positive')

        return cls(
            train_id=train.id,
            departure_station=departure_station,
            arrival_station=arrival_station,
            departure_date=departure_date,
            departure_time=departure_time,
            arrival_time=arrival_time,
            fare=fare,
            total_capacity=capacity,
            available_seats=capacity,
            version=0,
            train_number=train.train_number,
            train_name=train.train_name,
            train_type=train.train_type,
        )

    @property
    def booked_seats(self) -> int:
        return self.total_capacity - self.available_seats

    def can_accommodate(self, seat_count: int) -> bool:
        return self.available_seats >= seat_count

    def price_for(self, seat_count: int) -> Decimal:
        return self.fare * seat_count

    def adjusted_availability(self, delta: int) -> int:
        """
        Availability after applying delta (negative books, positive releases).

        Raises:
            CapacityExceededError: result would be below zero or above total_capacity
        """
        new_available = self.available_seats + delta
        if new_available < 0 or new_available > self.total_capacity:
            raise CapacityExceededError(
                schedule_id=self.id,
                delta=delta,
                available=self.available_seats,
                capacity=self.total_capacity,
            )
        return new_available

    def trip_summary(self) -> str:
        return (
            f'{self.train_name} ({self.train_number}) from {self.departure_station} '
            f'to {self.arrival_station} on {self.departure_date:%Y-%m-%d} '
            f'at {self.departure_time:%H:%M}'
        )
