from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import select, union, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.interface.i_schedule_catalog import IScheduleCatalog
from src.service.train_booking.domain.booking_errors import (
    ConcurrencyConflictError,
    ScheduleNotFoundError,
    TrainNotFoundError,
)
from src.service.train_booking.domain.entity.schedule_entity import Schedule
from src.service.train_booking.domain.entity.train_entity import Train
from src.service.train_booking.domain.enum.train_type import TrainType
from src.service.train_booking.driven_adapter.model.schedule_model import ScheduleModel
from src.service.train_booking.driven_adapter.model.train_model import TrainModel


class ScheduleCatalogImpl(IScheduleCatalog):
    """
    Trains, schedules and seat inventory on SQLAlchemy.

    Seat inventory uses optimistic concurrency: adjust_availability reads
    (available_seats, version), computes the new count, and writes it with
    ``WHERE version = :read_version``. A zero-row update means another
    transaction got there first, so the row is re-read and the adjustment
    retried up to ``max_retries`` times.
    """

    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None,
        *,
        max_retries: int = 5,
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None
        self.max_retries = max_retries

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly; the UoW commits.
        Otherwise open a short transaction from session_factory.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_train(db_train: TrainModel) -> Train:
        return Train(
            id=db_train.id,
            train_number=db_train.train_number,
            train_name=db_train.train_name,
            train_type=TrainType(db_train.train_type),
            total_seats=db_train.total_seats,
        )

    @staticmethod
    def _to_entity(db_schedule: ScheduleModel) -> Schedule:
        train = db_schedule.train
        return Schedule(
            id=db_schedule.id,
            train_id=db_schedule.train_id,
            departure_station=db_schedule.departure_station,
            arrival_station=db_schedule.arrival_station,
            departure_date=db_schedule.departure_date,
            departure_time=db_schedule.departure_time,
            arrival_time=db_schedule.arrival_time,
            fare=db_schedule.fare,
            total_capacity=db_schedule.total_capacity,
            available_seats=db_schedule.available_seats,
            version=db_schedule.version,
            train_number=train.train_number,
            train_name=train.train_name,
            train_type=TrainType(train.train_type),
        )

    @staticmethod
    async def _load(session: AsyncSession, schedule_id: int) -> Schedule:
        # populate_existing: always reflect the latest committed row, not the identity map
        result = await session.execute(
            select(ScheduleModel)
            .where(ScheduleModel.id == schedule_id)
            .execution_options(populate_existing=True)
        )
        db_schedule = result.scalar_one_or_none()
        if db_schedule is None:
            raise ScheduleNotFoundError(schedule_id)
        return ScheduleCatalogImpl._to_entity(db_schedule)

    @Logger.io
    async def create_train(self, *, train: Train) -> Train:
        async with self._get_session() as session:
            db_train = TrainModel(
                train_number=train.train_number,
                train_name=train.train_name,
                train_type=train.train_type.value,
                total_seats=train.total_seats,
            )
            session.add(db_train)
            try:
                await session.flush()
            except IntegrityError as e:
                raise ConflictError(f'Train number already exists: {train.train_number}') from e
            return self._to_train(db_train)

    @Logger.io
    async def find_train_by_id(self, *, train_id: int) -> Train:
        async with self._get_session() as session:
            db_train = await session.get(TrainModel, train_id)
            if db_train is None:
                raise TrainNotFoundError(train_id)
            return self._to_train(db_train)

    @Logger.io
    async def create(self, *, schedule: Schedule) -> Schedule:
        async with self._get_session() as session:
            db_schedule = ScheduleModel(
                train_id=schedule.train_id,
                departure_station=schedule.departure_station,
                arrival_station=schedule.arrival_station,
                departure_date=schedule.departure_date,
                departure_time=schedule.departure_time,
                arrival_time=schedule.arrival_time,
                fare=schedule.fare,
                total_capacity=schedule.total_capacity,
                available_seats=schedule.total_capacity,
                version=0,
            )
            session.add(db_schedule)
            try:
                await session.flush()
            except IntegrityError as e:
                raise TrainNotFoundError(schedule.train_id) from e
            return await self._load(session, db_schedule.id)

    @Logger.io
    async def find_by_id(self, *, schedule_id: int) -> Schedule:
        async with self._get_session() as session:
            return await self._load(session, schedule_id)

    @Logger.io
    async def find_by_ids(self, *, schedule_ids: List[int]) -> dict[int, Schedule]:
        if not schedule_ids:
            return {}
        async with self._get_session() as session:
            result = await session.execute(
                select(ScheduleModel).where(ScheduleModel.id.in_(set(schedule_ids)))
            )
            return {
                db_schedule.id: self._to_entity(db_schedule)
                for db_schedule in result.scalars().all()
            }

    @Logger.io
    async def find_all(self) -> List[Schedule]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ScheduleModel).order_by(
                    ScheduleModel.departure_date, ScheduleModel.departure_time, ScheduleModel.id
                )
            )
            return [self._to_entity(db_schedule) for db_schedule in result.scalars().all()]

    @Logger.io
    async def search(
        self,
        *,
        departure_station: str,
        arrival_station: str,
        departure_date: date,
        min_seats: int,
    ) -> List[Schedule]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ScheduleModel)
                .where(
                    ScheduleModel.departure_station == departure_station,
                    ScheduleModel.arrival_station == arrival_station,
                    ScheduleModel.departure_date == departure_date,
                    ScheduleModel.available_seats >= min_seats,
                )
                .order_by(ScheduleModel.departure_time, ScheduleModel.id)
            )
            return [self._to_entity(db_schedule) for db_schedule in result.scalars().all()]

    @Logger.io
    async def list_stations(self) -> List[str]:
        stations = union(
            select(ScheduleModel.departure_station.label('station')),
            select(ScheduleModel.arrival_station.label('station')),
        ).subquery()
        async with self._get_session() as session:
            result = await session.execute(select(stations.c.station).order_by(stations.c.station))
            return list(result.scalars().all())

    @Logger.io
    async def adjust_availability(self, *, schedule_id: int, delta: int) -> Schedule:
        async with self._get_session() as session:
            for attempt in range(1, self.max_retries + 1):
                schedule = await self._load(session, schedule_id)
                # Raises CapacityExceededError, no write attempted
                new_available = schedule.adjusted_availability(delta)

                result = await session.execute(
                    update(ScheduleModel)
                    .where(
                        ScheduleModel.id == schedule_id,
                        ScheduleModel.version == schedule.version,
                    )
                    .values(available_seats=new_available, version=schedule.version + 1)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 1:  # type: ignore[attr-defined]
                    Logger.base.info(
                        f'🎫 [SEATS] schedule={schedule_id} delta={delta:+d} '
                        f'available {schedule.available_seats} -> {new_available}'
                    )
                    return await self._load(session, schedule_id)

                Logger.base.warning(
                    f'🔁 [SEATS] Version conflict on schedule={schedule_id} '
                    f'(attempt {attempt}/{self.max_retries})'
                )

        raise ConcurrencyConflictError(
            f'Seat inventory for schedule {schedule_id} changed concurrently, please retry'
        )
