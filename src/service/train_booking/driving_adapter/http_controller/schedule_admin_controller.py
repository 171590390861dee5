from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.command.create_schedule_use_case import (
    CreateScheduleUseCase,
    CreateTrainUseCase,
)
from src.service.train_booking.app.query.list_schedules_use_case import ListSchedulesUseCase
from src.service.train_booking.driving_adapter.http_controller.schema.booking_schema import (
    TripResponse,
)
from src.service.train_booking.driving_adapter.http_controller.schema.schedule_schema import (
    CreateScheduleRequest,
    CreateTrainRequest,
    TrainResponse,
)


router = APIRouter()


@router.post('/train', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_train(
    request: CreateTrainRequest,
    use_case: CreateTrainUseCase = Depends(CreateTrainUseCase.depends),
) -> TrainResponse:
    train = await use_case.execute(
        train_number=request.train_number,
        train_name=request.train_name,
        train_type=request.train_type,
        total_seats=request.total_seats,
    )
    return TrainResponse.model_validate(train)


@router.post('/schedule', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_schedule(
    request: CreateScheduleRequest,
    use_case: CreateScheduleUseCase = Depends(CreateScheduleUseCase.depends),
) -> TripResponse:
    trip = await use_case.execute(
        train_id=request.train_id,
        departure_station=request.departure_station,
        arrival_station=request.arrival_station,
        departure_date=request.departure_date,
        departure_time=request.departure_time,
        arrival_time=request.arrival_time,
        fare=request.fare,
        total_capacity=request.total_capacity,
    )
    return TripResponse.model_validate(trip)


@router.get('/schedule')
@Logger.io
async def list_schedules(
    use_case: ListSchedulesUseCase = Depends(ListSchedulesUseCase.depends),
) -> List[TripResponse]:
    trips = await use_case.list_schedules()
    return [TripResponse.model_validate(trip) for trip in trips]


@router.get('/schedule/{schedule_id}')
@Logger.io
async def get_schedule(
    schedule_id: int,
    use_case: ListSchedulesUseCase = Depends(ListSchedulesUseCase.depends),
) -> TripResponse:
    trip = await use_case.get_schedule(schedule_id=schedule_id)
    return TripResponse.model_validate(trip)


@router.get('/station')
@Logger.io
async def list_stations(
    use_case: ListSchedulesUseCase = Depends(ListSchedulesUseCase.depends),
) -> List[str]:
    return await use_case.list_stations()
