"""
Train Booking domain errors

Each maps to an HTTP status through CustomBaseError.status_code:
- NotFoundError subclasses → 404
- ConflictError subclasses → 409 (seat contention; ConcurrencyConflictError is transient)
- DomainError subclasses → 400 (illegal lifecycle transitions)
"""

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    ServiceUnavailableError,
)


class TrainNotFoundError(NotFoundError):
    def __init__(self, train_id: int) -> None:
        self.train_id = train_id
        super().__init__(f'Train not found with id: {train_id}')


class ScheduleNotFoundError(NotFoundError):
    def __init__(self, schedule_id: int) -> None:
        self.schedule_id = schedule_id
        super().__init__(f'Schedule not found with id: {schedule_id}')


class BookingNotFoundError(NotFoundError):
    def __init__(self, *, booking_id: int | None = None, reservation_code: str | None = None) -> None:
        self.booking_id = booking_id
        self.reservation_code = reservation_code
        if reservation_code is not None:
            super().__init__(f'Booking not found with PNR: {reservation_code}')
        else:
            super().__init__(f'Booking not found with id: {booking_id}')


class SeatsUnavailableError(ConflictError):
    def __init__(self, *, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(f'Not enough seats available. Requested: {requested}, Available: {available}')


class CapacityExceededError(ConflictError):
    """Seat adjustment would leave available_seats outside [0, total_capacity]."""

    def __init__(self, *, schedule_id: int | None, delta: int, available: int, capacity: int) -> None:
        self.schedule_id = schedule_id
        self.delta = delta
        self.available = available
        self.capacity = capacity
        super().__init__(
            f'Seat adjustment {delta:+d} out of range for schedule {schedule_id} '
            f'(available: {available}, capacity: {capacity})'
        )


class ConcurrencyConflictError(ConflictError):
    """Transient: the operation lost a race too many times; the caller may retry it."""

    def __init__(self, message: str = 'Concurrent update conflict, please retry') -> None:
        super().__init__(message)


class InvalidTransitionError(DomainError):
    def __init__(self, message: str = 'Cannot update a cancelled booking') -> None:
        super().__init__(message)


class AlreadyCancelledError(DomainError):
    def __init__(self, message: str = 'Booking is already cancelled') -> None:
        super().__init__(message)


class GenerationExhaustedError(ServiceUnavailableError):
    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f'Could not generate a unique reservation code after {attempts} attempts')
