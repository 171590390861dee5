from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.train_booking.driven_adapter.model.schedule_model import ScheduleModel


class TrainModel(Base):
    __tablename__ = 'train'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    train_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    train_name: Mapped[str] = mapped_column(String(100), nullable=False)
    train_type: Mapped[str] = mapped_column(String(20), nullable=False)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)

    schedules: Mapped[List['ScheduleModel']] = relationship(
        'ScheduleModel', back_populates='train', viewonly=True
    )
