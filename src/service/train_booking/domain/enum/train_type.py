from enum import StrEnum


class TrainType(StrEnum):
    FIRST_CLASS = 'FIRST_CLASS'
    SECOND_CLASS = 'SECOND_CLASS'
    THIRD_CLASS = 'THIRD_CLASS'
