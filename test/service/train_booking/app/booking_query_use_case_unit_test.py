from datetime import date, time
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.train_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.train_booking.app.query.search_trains_use_case import SearchTrainsUseCase
from src.service.train_booking.domain.entity.booking_entity import Booking
from src.service.train_booking.domain.entity.schedule_entity import Schedule
from src.service.train_booking.domain.enum.train_type import TrainType


def _make_schedule(schedule_id: int = 1, departure_time: time = time(16, 30)) -> Schedule:
    return Schedule(
        id=schedule_id,
        train_id=1,
        departure_station='New Delhi',
        arrival_station='Mumbai',
        departure_date=date(2025, 9, 15),
        departure_time=departure_time,
        arrival_time=time(8, 30),
        fare=Decimal('2500.00'),
        total_capacity=300,
        available_seats=120,
        train_number='TR001',
        train_name='Rajdhani Express',
        train_type=TrainType.FIRST_CLASS,
    )


def _make_booking(booking_id: int, schedule_id: int) -> Booking:
    return Booking(
        id=booking_id,
        schedule_id=schedule_id,
        reservation_code=f'PNR00000{booking_id}',
        passenger_name='Asha Rao',
        passenger_email='asha@example.com',
        seat_count=1,
        total_amount=Decimal('2500.00'),
    )


@pytest.mark.unit
class TestSearchTrains:
    @pytest.mark.asyncio
    async def test_search_strips_stations_and_flattens_trips(self) -> None:
        """
        Given: The catalog holds one matching schedule
        When: Searching with padded station names
        Then: The catalog is queried with trimmed names and a TripView is returned
        """
        # Arrange
        catalog = AsyncMock()
        catalog.search.return_value = [_make_schedule()]
        use_case = SearchTrainsUseCase(schedule_catalog=catalog)

        # Act
        trips = await use_case.execute(
            departure_station=' New Delhi ',
            arrival_station='Mumbai ',
            departure_date=date(2025, 9, 15),
            min_seats=2,
        )

        # Assert
        catalog.search.assert_awaited_once_with(
            departure_station='New Delhi',
            arrival_station='Mumbai',
            departure_date=date(2025, 9, 15),
            min_seats=2,
        )
        assert len(trips) == 1
        trip = trips[0]
        assert trip.schedule_id == 1
        assert trip.train_type == 'FIRST_CLASS'
        assert trip.departure_date == '2025-09-15'
        assert trip.departure_time == '16:30'
        assert trip.available_seats == 120

    @pytest.mark.asyncio
    async def test_search_rejects_non_positive_seat_count(self) -> None:
        catalog = AsyncMock()
        use_case = SearchTrainsUseCase(schedule_catalog=catalog)

        with pytest.raises(DomainError):
            await use_case.execute(
                departure_station='New Delhi',
                arrival_station='Mumbai',
                departure_date=date(2025, 9, 15),
                min_seats=0,
            )

        catalog.search.assert_not_awaited()


@pytest.mark.unit
class TestGetBooking:
    @pytest.fixture
    def ledger(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def catalog(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def use_case(self, ledger: AsyncMock, catalog: AsyncMock) -> GetBookingUseCase:
        return GetBookingUseCase(booking_ledger=ledger, schedule_catalog=catalog)

    @pytest.mark.asyncio
    async def test_lookup_by_code_normalizes_input(
        self, use_case: GetBookingUseCase, ledger: AsyncMock, catalog: AsyncMock
    ) -> None:
        # Arrange
        ledger.find_by_code.return_value = _make_booking(1, 1)
        catalog.find_by_id.return_value = _make_schedule()

        # Act
        record = await use_case.get_booking_by_code(reservation_code=' pnr000001 ')

        # Assert
        ledger.find_by_code.assert_awaited_once_with(reservation_code='PNR000001')
        assert record.train_number == 'TR001'

    @pytest.mark.asyncio
    async def test_list_bookings_loads_schedules_in_one_batch(
        self, use_case: GetBookingUseCase, ledger: AsyncMock, catalog: AsyncMock
    ) -> None:
        # Arrange
        ledger.find_all.return_value = [_make_booking(1, 1), _make_booking(2, 2), _make_booking(3, 1)]
        catalog.find_by_ids.return_value = {
            1: _make_schedule(1),
            2: _make_schedule(2, departure_time=time(7, 20)),
        }

        # Act
        records = await use_case.list_bookings()

        # Assert
        assert [record.id for record in records] == [1, 2, 3]
        assert records[1].departure_time == '07:20'
        catalog.find_by_ids.assert_awaited_once()
        catalog.find_by_id.assert_not_awaited()
