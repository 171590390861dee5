from typing import Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.train_booking.domain.enum.train_type import TrainType


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Train {attribute.name} cannot be empty')


def _validate_positive(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value <= 0:
        raise ValueError(f'Train {attribute.name} must be positive')


@attrs.define
class Train:
    train_number: str = attrs.field(validator=_validate_non_empty_string)
    train_name: str = attrs.field(validator=_validate_non_empty_string)
    train_type: TrainType = attrs.field(converter=TrainType)
    total_seats: int = attrs.field(validator=_validate_positive)
    id: Optional[int] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        train_number: str,
        train_name: str,
        train_type: TrainType | str,
        total_seats: int,
    ) -> 'Train':
        return cls(
            train_number=train_number.strip(),
            train_name=train_name.strip(),
            train_type=train_type,
            total_seats=total_seats,
        )
