from enum import StrEnum


class BookingStatus(StrEnum):
    """Confirmed on creation; cancelled is terminal."""

    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
