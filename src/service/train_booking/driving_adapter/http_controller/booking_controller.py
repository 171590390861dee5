from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.train_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.train_booking.app.command.update_booking_use_case import UpdateBookingUseCase
from src.service.train_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.train_booking.app.query.search_trains_use_case import SearchTrainsUseCase
from src.service.train_booking.domain.enum.booking_status import BookingStatus
from src.service.train_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
    CreateBookingRequest,
    SearchTrainsRequest,
    TripResponse,
    UpdateBookingRequest,
)


router = APIRouter()


@router.post('/search')
@Logger.io
async def search_trains(
    request: SearchTrainsRequest,
    use_case: SearchTrainsUseCase = Depends(SearchTrainsUseCase.depends),
) -> List[TripResponse]:
    trips = await use_case.execute(
        departure_station=request.departure_station,
        arrival_station=request.arrival_station,
        departure_date=request.departure_date,
        min_seats=request.seat_count,
    )
    return [TripResponse.model_validate(trip) for trip in trips]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: CreateBookingRequest,
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    record = await use_case.execute(
        schedule_id=request.schedule_id,
        passenger_name=request.passenger_name,
        passenger_email=str(request.passenger_email),
        passenger_phone=request.passenger_phone,
        seat_count=request.seat_count,
    )
    return BookingResponse.model_validate(record)


@router.get('')
@Logger.io
async def list_bookings(
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> List[BookingResponse]:
    records = await use_case.list_bookings()
    return [BookingResponse.model_validate(record) for record in records]


@router.get('/code/{reservation_code}')
@Logger.io
async def get_booking_by_code(
    reservation_code: str,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    record = await use_case.get_booking_by_code(reservation_code=reservation_code)
    return BookingResponse.model_validate(record)


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: int,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    record = await use_case.get_booking(booking_id=booking_id)
    return BookingResponse.model_validate(record)


@router.patch('/{booking_id}')
@Logger.io
async def update_booking(
    booking_id: int,
    request: UpdateBookingRequest,
    use_case: UpdateBookingUseCase = Depends(UpdateBookingUseCase.depends),
) -> BookingResponse:
    record = await use_case.execute(
        booking_id=booking_id,
        passenger_name=request.passenger_name,
        passenger_email=str(request.passenger_email) if request.passenger_email else None,
        passenger_phone=request.passenger_phone,
        seat_count=request.seat_count,
        status=BookingStatus(request.status) if request.status else None,
    )
    return BookingResponse.model_validate(record)


@router.delete('/{booking_id}')
@Logger.io
async def cancel_booking(
    booking_id: int,
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    record = await use_case.execute(booking_id=booking_id)
    return BookingResponse.model_validate(record)
