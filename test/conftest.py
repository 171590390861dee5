"""
Test Configuration and Fixtures

This module provides:
- Early environment setup (log directory, SQLite database URL)
- A fresh SQLite database per test (integration tests)
- Unit of Work factory and seeded train / schedule fixtures
- FakeUnitOfWork and RecordingDispatcher for unit tests
- FastAPI TestClient running the real lifespan against a temporary database

Architecture:
- Unit tests (@pytest.mark.unit): ports replaced with AsyncMock
- Integration tests (@pytest.mark.integration): real SQLAlchemy stack on aiosqlite
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings is instantiated at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Never reach for a PostgreSQL server from the test suite
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{test_log_dir / "default_test.db"}'
    os.environ.setdefault('SEAT_ADJUST_MAX_RETRIES', '5')


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from datetime import date, time, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any, List  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.database.orm_db_setting import Database  # noqa: E402
from src.platform.database.unit_of_work import (  # noqa: E402
    AbstractUnitOfWork,
    SqlAlchemyUnitOfWork,
)
from src.service.train_booking.app.command.create_schedule_use_case import (  # noqa: E402
    CreateScheduleUseCase,
    CreateTrainUseCase,
)
from src.service.train_booking.app.dto.booking_record import TripView  # noqa: E402
from src.service.train_booking.app.interface.i_notification_dispatcher import (  # noqa: E402
    INotificationDispatcher,
)
from src.service.train_booking.domain.domain_event.booking_domain_event import (  # noqa: E402
    BookingNotificationEvent,
)
from src.service.train_booking.domain.entity.train_entity import Train  # noqa: E402
from src.service.train_booking.domain.enum.train_type import TrainType  # noqa: E402


TRAVEL_DATE = date.today() + timedelta(days=7)
DEFAULT_FARE = Decimal('2500.00')
DEFAULT_CAPACITY = 300


# =============================================================================
# Unit Test Doubles
# =============================================================================
class FakeUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over AsyncMock repositories; records commit calls."""

    def __init__(self) -> None:
        self.schedule_catalog = AsyncMock()
        self.booking_ledger = AsyncMock()
        self.committed = False

    async def _commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass


class RecordingDispatcher(INotificationDispatcher):
    def __init__(self) -> None:
        self.events: List[BookingNotificationEvent] = []

    def dispatch(self, *, event: BookingNotificationEvent) -> bool:
        self.events.append(event)
        return True


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def recording_dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


# =============================================================================
# Database Fixtures (integration)
# =============================================================================
@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    db = Database(url=f'sqlite+aiosqlite:///{tmp_path / "train_booking_test.db"}')
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], SqlAlchemyUnitOfWork]:
    def _factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(
            session_factory=database.session_maker, seat_adjust_max_retries=5
        )

    return _factory


async def _create_train(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork],
    *,
    train_number: str = 'TR001',
    train_name: str = 'Rajdhani Express',
    total_seats: int = DEFAULT_CAPACITY,
) -> Train:
    return await CreateTrainUseCase(uow=uow_factory()).execute(
        train_number=train_number,
        train_name=train_name,
        train_type=TrainType.FIRST_CLASS,
        total_seats=total_seats,
    )


async def _create_schedule(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork],
    *,
    train_id: int,
    departure_station: str = 'New Delhi',
    arrival_station: str = 'Mumbai',
    departure_date: date = TRAVEL_DATE,
    departure_time: time = time(16, 30),
    fare: Decimal = DEFAULT_FARE,
    total_capacity: int | None = None,
) -> TripView:
    return await CreateScheduleUseCase(uow=uow_factory()).execute(
        train_id=train_id,
        departure_station=departure_station,
        arrival_station=arrival_station,
        departure_date=departure_date,
        departure_time=departure_time,
        arrival_time=time(8, 30),
        fare=fare,
        total_capacity=total_capacity,
    )


@pytest_asyncio.fixture
async def train(uow_factory: Callable[[], SqlAlchemyUnitOfWork]) -> Train:
    return await _create_train(uow_factory)


@pytest_asyncio.fixture
async def trip(uow_factory: Callable[[], SqlAlchemyUnitOfWork], train: Train) -> TripView:
    """New Delhi → Mumbai, 300 seats at 2500.00"""
    assert train.id is not None
    return await _create_schedule(uow_factory, train_id=train.id)


# =============================================================================
# HTTP Fixtures
# =============================================================================
@pytest.fixture
def client(tmp_path: Path) -> Generator[TestClient, None, None]:
    """
    TestClient with the production lifespan.

    The Database is created here but its engine is built lazily inside the
    TestClient event loop when the lifespan calls create_tables().
    """
    from src.main import app

    test_db = Database(url=f'sqlite+aiosqlite:///{tmp_path / "train_booking_api.db"}')
    container.reset_singletons()
    container.database.override(providers.Object(test_db))
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.database.reset_override()
        container.reset_singletons()


def _post_train_and_schedule(client: TestClient, **schedule_overrides: Any) -> dict:
    train_response = client.post(
        '/api/admin/train',
        json={
            'train_number': 'TR001',
            'train_name': 'Rajdhani Express',
            'train_type': 'FIRST_CLASS',
            'total_seats': DEFAULT_CAPACITY,
        },
    )
    assert train_response.status_code == 201
    payload = {
        'train_id': train_response.json()['id'],
        'departure_station': 'New Delhi',
        'arrival_station': 'Mumbai',
        'departure_date': TRAVEL_DATE.isoformat(),
        'departure_time': '16:30',
        'arrival_time': '08:30',
        'fare': '2500.00',
    }
    payload.update(schedule_overrides)
    schedule_response = client.post('/api/admin/schedule', json=payload)
    assert schedule_response.status_code == 201
    return schedule_response.json()


@pytest.fixture
def api_trip(client: TestClient) -> dict:
    """New Delhi → Mumbai trip created through the admin API"""
    return _post_train_and_schedule(client)


# =============================================================================
# Factory Fixtures
# =============================================================================
@pytest.fixture
def travel_date() -> date:
    return TRAVEL_DATE


@pytest.fixture
def train_factory(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork],
) -> Callable[..., Any]:
    async def _factory(**kwargs: Any) -> Train:
        return await _create_train(uow_factory, **kwargs)

    return _factory


@pytest.fixture
def schedule_factory(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork],
) -> Callable[..., Any]:
    async def _factory(**kwargs: Any) -> TripView:
        return await _create_schedule(uow_factory, **kwargs)

    return _factory
