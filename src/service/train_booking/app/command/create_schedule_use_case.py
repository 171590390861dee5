from datetime import date, time
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.dto.booking_record import TripView
from src.service.train_booking.domain.entity.schedule_entity import Schedule
from src.service.train_booking.domain.entity.train_entity import Train
from src.service.train_booking.domain.enum.train_type import TrainType


class CreateTrainUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self, *, train_number: str, train_name: str, train_type: TrainType, total_seats: int
    ) -> Train:
        train = Train.create(
            train_number=train_number,
            train_name=train_name,
            train_type=train_type,
            total_seats=total_seats,
        )
        async with self.uow:
            train = await self.uow.schedule_catalog.create_train(train=train)
            await self.uow.commit()
        Logger.base.info(f'🚆 [ADMIN] Created train {train.train_number} (id={train.id})')
        return train


class CreateScheduleUseCase:
    """Admin entry point: schedule a trip for an existing train. Seats start fully available."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self,
        *,
        train_id: int,
        departure_station: str,
        arrival_station: str,
        departure_date: date,
        departure_time: time,
        arrival_time: time,
        fare: Decimal,
        total_capacity: Optional[int] = None,
    ) -> TripView:
        async with self.uow:
            train = await self.uow.schedule_catalog.find_train_by_id(train_id=train_id)
            schedule = Schedule.create(
                train=train,
                departure_station=departure_station,
                arrival_station=arrival_station,
                departure_date=departure_date,
                departure_time=departure_time,
                arrival_time=arrival_time,
                fare=fare,
                total_capacity=total_capacity,
            )
            schedule = await self.uow.schedule_catalog.create(schedule=schedule)
            await self.uow.commit()
        Logger.base.info(
            f'🗓️ [ADMIN] Scheduled {schedule.trip_summary()} '
            f'with {schedule.total_capacity} seats (id={schedule.id})'
        )
        return TripView.from_schedule(schedule)
