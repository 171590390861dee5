"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.train_booking.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    create_schedule_use_case,
    update_booking_use_case,
)
from src.service.train_booking.app.query import (
    get_booking_use_case,
    list_schedules_use_case,
    search_trains_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    update_booking_use_case,
    cancel_booking_use_case,
    create_schedule_use_case,
    search_trains_use_case,
    get_booking_use_case,
    list_schedules_use_case,
]
