"""
Reservation Code Generator

Issues PNR-style codes: a fixed prefix followed by random digits
(PNR + 6 digits by default, e.g. PNR048213). Candidates are re-drawn while
the ledger already holds them, up to a bounded number of draws.
"""

import secrets
from typing import Awaitable, Callable

from src.platform.logging.loguru_io import Logger
from src.service.train_booking.domain.booking_errors import GenerationExhaustedError


ExistsProbe = Callable[[str], Awaitable[bool]]


class ReservationCodeGenerator:
    def __init__(self, *, prefix: str = 'PNR', digits: int = 6, max_attempts: int = 10) -> None:
        if digits <= 0:
            raise ValueError('digits must be positive')
        if max_attempts <= 0:
            raise ValueError('max_attempts must be positive')
        # Lookups by code are case-insensitive and compare upper-cased codes
        self.prefix = prefix.strip().upper()
        self.digits = digits
        self.max_attempts = max_attempts

    def draw(self) -> str:
        return f'{self.prefix}{secrets.randbelow(10**self.digits):0{self.digits}d}'

    @Logger.io
    async def generate_unique(self, exists: ExistsProbe) -> str:
        """
        Draw codes until ``exists`` reports one as unused.

        The returned code is only probably unique: a concurrent caller may
        draw the same code before either commits, which the ledger's unique
        constraint rejects.

        Raises:
            GenerationExhaustedError: every draw collided
        """
        for _ in range(self.max_attempts):
            candidate = self.draw()
            if not await exists(candidate):
                return candidate
            Logger.base.warning(f'🔁 [PNR] Collision on {candidate}, re-drawing')
        raise GenerationExhaustedError(self.max_attempts)
