from datetime import date, time
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.train_booking.driven_adapter.model.train_model import TrainModel


class ScheduleModel(Base):
    __tablename__ = 'schedule'
    __table_args__ = (
        CheckConstraint(
            'available_seats >= 0 AND available_seats <= total_capacity',
            name='ck_schedule_available_seats_range',
        ),
        Index('ix_schedule_route_date', 'departure_station', 'arrival_station', 'departure_date'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    train_id: Mapped[int] = mapped_column(Integer, ForeignKey('train.id'), nullable=False)
    departure_station: Mapped[str] = mapped_column(String(100), nullable=False)
    arrival_station: Mapped[str] = mapped_column(String(100), nullable=False)
    departure_date: Mapped[date] = mapped_column(Date, nullable=False)
    departure_time: Mapped[time] = mapped_column(Time, nullable=False)
    arrival_time: Mapped[time] = mapped_column(Time, nullable=False)
    fare: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    # Optimistic concurrency token, bumped on every seat adjustment
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    train: Mapped['TrainModel'] = relationship(
        'TrainModel', back_populates='schedules', lazy='joined'
    )
