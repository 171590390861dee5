"""
Unit tests for CreateBookingUseCase

Flow under test:
1. Load schedule, fail fast on insufficient seats
2. Draw a reservation code unused in the ledger
3. Persist booking, take seats via adjust_availability(-n)
4. Commit, then dispatch BookingConfirmedEvent
"""

from datetime import date, time
from decimal import Decimal
import re

import attrs
import pytest

from src.service.train_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.train_booking.domain.booking_errors import (
    CapacityExceededError,
    ScheduleNotFoundError,
    SeatsUnavailableError,
)
from src.service.train_booking.domain.domain_event.booking_domain_event import (
    BookingConfirmedEvent,
)
from src.service.train_booking.domain.entity.booking_entity import Booking
from src.service.train_booking.domain.entity.schedule_entity import Schedule
from src.service.train_booking.domain.reservation_code_generator import ReservationCodeGenerator


def _make_schedule(available_seats: int = 300) -> Schedule:
    return Schedule(
        id=1,
        train_id=1,
        departure_station='New Delhi',
        arrival_station='Mumbai',
        departure_date=date(2025, 9, 15),
        departure_time=time(16, 30),
        arrival_time=time(8, 30),
        fare=Decimal('2500.00'),
        total_capacity=300,
        available_seats=available_seats,
        train_number='TR001',
        train_name='Rajdhani Express',
    )


@pytest.mark.unit
class TestCreateBooking:
    @pytest.fixture
    def use_case(self, fake_uow, recording_dispatcher) -> CreateBookingUseCase:
        fake_uow.booking_ledger.exists_by_code.return_value = False
        fake_uow.booking_ledger.create.side_effect = lambda *, booking: attrs.evolve(
            booking, id=11
        )
        return CreateBookingUseCase(
            uow=fake_uow,
            code_generator=ReservationCodeGenerator(),
            notification_dispatcher=recording_dispatcher,
        )

    @pytest.mark.asyncio
    async def test_books_seats_and_dispatches_confirmation(
        self, use_case: CreateBookingUseCase, fake_uow, recording_dispatcher
    ) -> None:
        """
        Given: A schedule with 300 seats at 2500.00
        When: 3 seats are booked
        Then: Booking is confirmed for 7500.00, inventory is adjusted by -3,
              the unit of work commits and a confirmation is dispatched
        """
        # Arrange
        schedule = _make_schedule()
        fake_uow.schedule_catalog.find_by_id.return_value = schedule
        fake_uow.schedule_catalog.adjust_availability.return_value = attrs.evolve(
            schedule, available_seats=297, version=1
        )

        # Act
        record = await use_case.execute(
            schedule_id=1,
            passenger_name='Asha Rao',
            passenger_email='asha@example.com',
            seat_count=3,
        )

        # Assert
        assert record.id == 11
        assert record.status == 'confirmed'
        assert record.total_amount == Decimal('7500.00')
        assert re.fullmatch(r'PNR\d{6}', record.reservation_code)
        assert record.train_name == 'Rajdhani Express'
        fake_uow.schedule_catalog.adjust_availability.assert_awaited_once_with(
            schedule_id=1, delta=-3
        )
        assert fake_uow.committed

        assert len(recording_dispatcher.events) == 1
        event = recording_dispatcher.events[0]
        assert isinstance(event, BookingConfirmedEvent)
        assert event.reservation_code == record.reservation_code
        assert event.trip_summary == (
            'Rajdhani Express (TR001) from New Delhi to Mumbai on 2025-09-15 at 16:30'
        )

    @pytest.mark.asyncio
    async def test_insufficient_seats_fails_before_writing(
        self, use_case: CreateBookingUseCase, fake_uow, recording_dispatcher
    ) -> None:
        # Arrange
        fake_uow.schedule_catalog.find_by_id.return_value = _make_schedule(available_seats=2)

        # Act
        with pytest.raises(SeatsUnavailableError) as exc_info:
            await use_case.execute(
                schedule_id=1,
                passenger_name='Asha Rao',
                passenger_email='asha@example.com',
                seat_count=3,
            )

        # Assert
        assert str(exc_info.value) == 'Not enough seats available. Requested: 3, Available: 2'
        assert exc_info.value.status_code == 409
        fake_uow.booking_ledger.create.assert_not_awaited()
        fake_uow.schedule_catalog.adjust_availability.assert_not_awaited()
        assert not fake_uow.committed
        assert recording_dispatcher.events == []

    @pytest.mark.asyncio
    async def test_lost_race_on_inventory_rolls_back(
        self, use_case: CreateBookingUseCase, fake_uow, recording_dispatcher
    ) -> None:
        """
        Given: Seats looked available, but a concurrent booking took them
        When: adjust_availability rejects the decrement
        Then: SeatsUnavailableError with the current availability, nothing committed
        """
        # Arrange
        fake_uow.schedule_catalog.find_by_id.return_value = _make_schedule(available_seats=3)
        fake_uow.schedule_catalog.adjust_availability.side_effect = CapacityExceededError(
            schedule_id=1, delta=-3, available=1, capacity=300
        )

        # Act
        with pytest.raises(SeatsUnavailableError) as exc_info:
            await use_case.execute(
                schedule_id=1,
                passenger_name='Asha Rao',
                passenger_email='asha@example.com',
                seat_count=3,
            )

        # Assert
        assert exc_info.value.available == 1
        assert not fake_uow.committed
        assert recording_dispatcher.events == []

    @pytest.mark.asyncio
    async def test_unknown_schedule_propagates_not_found(
        self, use_case: CreateBookingUseCase, fake_uow
    ) -> None:
        fake_uow.schedule_catalog.find_by_id.side_effect = ScheduleNotFoundError(99)

        with pytest.raises(ScheduleNotFoundError, match='Schedule not found with id: 99'):
            await use_case.execute(
                schedule_id=99,
                passenger_name='Asha Rao',
                passenger_email='asha@example.com',
                seat_count=1,
            )

    @pytest.mark.asyncio
    async def test_reservation_code_is_checked_against_ledger(
        self, use_case: CreateBookingUseCase, fake_uow
    ) -> None:
        # Arrange
        schedule = _make_schedule()
        fake_uow.schedule_catalog.find_by_id.return_value = schedule
        fake_uow.schedule_catalog.adjust_availability.return_value = schedule
        fake_uow.booking_ledger.exists_by_code.side_effect = [True, False]

        # Act
        record = await use_case.execute(
            schedule_id=1,
            passenger_name='Asha Rao',
            passenger_email='asha@example.com',
            seat_count=1,
        )

        # Assert
        assert fake_uow.booking_ledger.exists_by_code.await_count == 2
        created: Booking = fake_uow.booking_ledger.create.await_args.kwargs['booking']
        assert created.reservation_code == record.reservation_code
