from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


PHONE_PATTERN = r'^[+]?[0-9]{10,15}$'


class SearchTrainsRequest(BaseModel):
    departure_station: str = Field(min_length=1, max_length=100)
    arrival_station: str = Field(min_length=1, max_length=100)
    departure_date: date
    seat_count: int = Field(default=1, ge=1)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'departure_station': 'Mumbai Central',
                'arrival_station': 'New Delhi',
                'departure_date': '2025-09-15',
                'seat_count': 2,
            }
        }
    )


class TripResponse(BaseModel):
    schedule_id: int
    train_number: str
    train_name: str
    train_type: Optional[str] = None
    departure_station: str
    arrival_station: str
    departure_date: str
    departure_time: str
    arrival_time: str
    fare: float
    total_capacity: int
    available_seats: int

    model_config = ConfigDict(from_attributes=True)


class CreateBookingRequest(BaseModel):
    schedule_id: int
    passenger_name: str = Field(min_length=2, max_length=100)
    passenger_email: EmailStr
    passenger_phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    seat_count: int = Field(ge=1, le=10)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'schedule_id': 1,
                'passenger_name': 'Asha Rao',
                'passenger_email': 'asha@example.com',
                'passenger_phone': '+919812345678',
                'seat_count': 2,
            }
        }
    )


class UpdateBookingRequest(BaseModel):
    passenger_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    passenger_email: Optional[EmailStr] = None
    passenger_phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    seat_count: Optional[int] = Field(default=None, ge=1, le=10)
    status: Optional[Literal['confirmed', 'cancelled']] = None

    model_config = ConfigDict(json_schema_extra={'example': {'seat_count': 3}})


class BookingResponse(BaseModel):
    id: int
    schedule_id: int
    reservation_code: str
    passenger_name: str
    passenger_email: str
    passenger_phone: Optional[str] = None
    seat_count: int
    total_amount: float
    status: str
    created_at: Optional[datetime] = None
    train_number: str
    train_name: str
    departure_station: str
    arrival_station: str
    departure_date: str
    departure_time: str
    arrival_time: str

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': 1,
                'schedule_id': 1,
                'reservation_code': 'PNR048213',
                'passenger_name': 'Asha Rao',
                'passenger_email': 'asha@example.com',
                'passenger_phone': '+919812345678',
                'seat_count': 2,
                'total_amount': 5000.0,
                'status': 'confirmed',
                'created_at': '2025-09-01T10:30:00',
                'train_number': '12951',
                'train_name': 'Mumbai Rajdhani',
                'departure_station': 'Mumbai Central',
                'arrival_station': 'New Delhi',
                'departure_date': '2025-09-15',
                'departure_time': '16:35',
                'arrival_time': '08:35',
            }
        },
    )
