from datetime import date, time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.train_booking.domain.enum.train_type import TrainType


class CreateTrainRequest(BaseModel):
    train_number: str = Field(min_length=1, max_length=20)
    train_name: str = Field(min_length=1, max_length=100)
    train_type: TrainType
    total_seats: int = Field(gt=0)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'train_number': '12951',
                'train_name': 'Mumbai Rajdhani',
                'train_type': 'FIRST_CLASS',
                'total_seats': 300,
            }
        }
    )


class TrainResponse(BaseModel):
    id: int
    train_number: str
    train_name: str
    train_type: TrainType
    total_seats: int

    model_config = ConfigDict(from_attributes=True)


class CreateScheduleRequest(BaseModel):
    train_id: int
    departure_station: str = Field(min_length=1, max_length=100)
    arrival_station: str = Field(min_length=1, max_length=100)
    departure_date: date
    departure_time: time
    arrival_time: time
    fare: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    total_capacity: Optional[int] = Field(default=None, gt=0)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'train_id': 1,
                'departure_station': 'Mumbai Central',
                'arrival_station': 'New Delhi',
                'departure_date': '2025-09-15',
                'departure_time': '16:35',
                'arrival_time': '08:35',
                'fare': 2500.0,
            }
        }
    )
