"""
Unit tests for the optimistic retry loop in ScheduleCatalogImpl.adjust_availability

SQLite serializes writers, so version conflicts are simulated here with a
session whose conditional UPDATE reports zero matched rows.
"""

from datetime import date, time
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import attrs
import pytest

from src.service.train_booking.domain.booking_errors import (
    CapacityExceededError,
    ConcurrencyConflictError,
)
from src.service.train_booking.domain.entity.schedule_entity import Schedule
from src.service.train_booking.driven_adapter.repo.schedule_catalog_impl import (
    ScheduleCatalogImpl,
)


def _make_schedule(available_seats: int = 10, version: int = 4) -> Schedule:
    return Schedule(
        id=1,
        train_id=1,
        departure_station='New Delhi',
        arrival_station='Mumbai',
        departure_date=date(2025, 9, 15),
        departure_time=time(16, 30),
        arrival_time=time(8, 30),
        fare=Decimal('2500.00'),
        total_capacity=10,
        available_seats=available_seats,
        version=version,
    )


def _update_result(rowcount: int) -> MagicMock:
    result = MagicMock()
    result.rowcount = rowcount
    return result


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def catalog(session: AsyncMock) -> ScheduleCatalogImpl:
    catalog = ScheduleCatalogImpl(max_retries=3)
    catalog.session = session
    return catalog


@pytest.mark.unit
class TestAdjustAvailabilityRetry:
    @pytest.mark.asyncio
    async def test_retries_after_version_conflict(
        self, catalog: ScheduleCatalogImpl, session: AsyncMock
    ) -> None:
        """
        Given: The first conditional UPDATE loses to a concurrent writer
        When: adjust_availability(-2) is called
        Then: The row is re-read and the second attempt succeeds
        """
        # Arrange
        stale = _make_schedule(available_seats=10, version=4)
        fresh = _make_schedule(available_seats=9, version=5)
        written = attrs.evolve(fresh, available_seats=7, version=6)
        catalog._load = AsyncMock(side_effect=[stale, fresh, written])  # type: ignore[method-assign]
        session.execute.side_effect = [_update_result(0), _update_result(1)]

        # Act
        result = await catalog.adjust_availability(schedule_id=1, delta=-2)

        # Assert
        assert result.available_seats == 7
        assert session.execute.await_count == 2
        assert catalog._load.await_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(
        self, catalog: ScheduleCatalogImpl, session: AsyncMock
    ) -> None:
        # Arrange
        catalog._load = AsyncMock(return_value=_make_schedule())  # type: ignore[method-assign]
        session.execute.return_value = _update_result(0)

        # Act
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await catalog.adjust_availability(schedule_id=1, delta=-1)

        # Assert
        assert session.execute.await_count == 3
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_out_of_range_adjustment_never_writes(
        self, catalog: ScheduleCatalogImpl, session: AsyncMock
    ) -> None:
        catalog._load = AsyncMock(return_value=_make_schedule(available_seats=1))  # type: ignore[method-assign]

        with pytest.raises(CapacityExceededError):
            await catalog.adjust_availability(schedule_id=1, delta=-2)

        session.execute.assert_not_awaited()
