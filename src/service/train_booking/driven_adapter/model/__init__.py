"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.train_booking.driven_adapter.model.booking_model import BookingModel
from src.service.train_booking.driven_adapter.model.schedule_model import ScheduleModel
from src.service.train_booking.driven_adapter.model.train_model import TrainModel

__all__ = [
    'BookingModel',
    'ScheduleModel',
    'TrainModel',
]
