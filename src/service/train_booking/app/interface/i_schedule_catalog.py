from abc import ABC, abstractmethod
from datetime import date
from typing import List

from src.service.train_booking.domain.entity.schedule_entity import Schedule
from src.service.train_booking.domain.entity.train_entity import Train


class IScheduleCatalog(ABC):
    """Repository interface for trains, schedules and their seat inventory"""

    @abstractmethod
    async def create_train(self, *, train: Train) -> Train:
        pass

    @abstractmethod
    async def find_train_by_id(self, *, train_id: int) -> Train:
        """Raises TrainNotFoundError"""
        pass

    @abstractmethod
    async def create(self, *, schedule: Schedule) -> Schedule:
        """Persist with available_seats = total_capacity and version 0"""
        pass

    @abstractmethod
    async def find_by_id(self, *, schedule_id: int) -> Schedule:
        """Raises ScheduleNotFoundError"""
        pass

    @abstractmethod
    async def find_by_ids(self, *, schedule_ids: List[int]) -> dict[int, Schedule]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Schedule]:
        pass

    @abstractmethod
    async def search(
        self,
        *,
        departure_station: str,
        arrival_station: str,
        departure_date: date,
        min_seats: int,
    ) -> List[Schedule]:
        """Matching route and date with available_seats >= min_seats, by departure_time"""
        pass

    @abstractmethod
    async def list_stations(self) -> List[str]:
        pass

    @abstractmethod
    async def adjust_availability(self, *, schedule_id: int, delta: int) -> Schedule:
        """
        The only mutation path for available_seats.

        Raises:
            ScheduleNotFoundError: schedule does not exist
            CapacityExceededError: result would fall outside [0, total_capacity]
            ConcurrencyConflictError: version conflicts exhausted the retry budget
        """
        pass
