from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Train Booking System'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # ASGI server (script/serve.py)
    SERVER_HOST: str = '0.0.0.0'
    SERVER_PORT: int = 8100
    SERVER_WORKERS: int = 1

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL (used when DATABASE_URL is not set)
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: str = '5432'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'train_booking'

    # Full async URL override, e.g. sqlite+aiosqlite:///./train_booking.db
    DATABASE_URL: str = ''

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Connection pool (ignored by SQLite)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    # SQLite busy timeout (seconds) while waiting for the write lock
    SQLITE_BUSY_TIMEOUT: float = 30.0

    # Seat inventory
    SEAT_ADJUST_MAX_RETRIES: int = 5

    # Reservation code: PREFIX + DIGITS random digits
    RESERVATION_CODE_PREFIX: str = 'PNR'
    RESERVATION_CODE_DIGITS: int = 6
    RESERVATION_CODE_MAX_ATTEMPTS: int = 10

    # Notification side channel
    NOTIFICATION_QUEUE_SIZE: int = 1000


settings = Settings()  # type: ignore
