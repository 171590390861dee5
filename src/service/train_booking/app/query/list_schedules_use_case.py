from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.dto.booking_record import TripView
from src.service.train_booking.app.interface.i_schedule_catalog import IScheduleCatalog


class ListSchedulesUseCase:
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
    async def list_schedules(self) -> List[TripView]:
        schedules = await self.schedule_catalog.find_all()
        return [TripView.from_schedule(schedule) for schedule in schedules]

    @Logger.io
    async def get_schedule(self, *, schedule_id: int) -> TripView:
        schedule = await self.schedule_catalog.find_by_id(schedule_id=schedule_id)
        return TripView.from_schedule(schedule)

    @Logger.io
    async def list_stations(self) -> List[str]:
        return await self.schedule_catalog.list_stations()
