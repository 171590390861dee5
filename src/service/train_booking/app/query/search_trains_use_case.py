from datetime import date
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.dto.booking_record import TripView
from src.service.train_booking.app.interface.i_schedule_catalog import IScheduleCatalog


class SearchTrainsUseCase:
    """Read-only trip search; never touches the booking ledger."""

    def __init__(self, *, schedule_catalog: IScheduleCatalog) -> None:
        self.schedule_catalog = schedule_catalog

    @classmethod
    @inject
    def depends(
        cls,
        schedule_catalog: IScheduleCatalog = Depends(Provide[Container.schedule_catalog]),
    ) -> Self:
        return cls(schedule_catalog=schedule_catalog)

    @Logger.io
    async def execute(
        self,
        *,
        departure_station: str,
        arrival_station: str,
        departure_date: date,
        min_seats: int = 1,
    ) -> List[TripView]:
        if min_seats < 1:
            raise DomainError('Seat count must be at least 1')
        schedules = await self.schedule_catalog.search(
            departure_station=departure_station.strip(),
            arrival_station=arrival_station.strip(),
            departure_date=departure_date,
            min_seats=min_seats,
        )
        return [TripView.from_schedule(schedule) for schedule in schedules]
