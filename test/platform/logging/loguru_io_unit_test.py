from decimal import Decimal

import pytest

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger, LoguruIO
from src.platform.logging.loguru_io_config import MASK, _parse_http_status_level, custom_logger
from src.platform.logging.loguru_io_utils import mask_sensitive, truncate_content
from src.service.train_booking.domain.entity.booking_entity import Booking


@pytest.mark.unit
class TestMaskSensitive:
    def test_masks_passenger_contact_in_entity_repr(self) -> None:
        """
        Given: A Booking whose repr contains email and phone
        When: It is masked for the IO log
        Then: Contact details are replaced, other fields survive
        """
        # Arrange
        booking = Booking(
            schedule_id=1,
            reservation_code='PNR123456',
            passenger_name='Asha Rao',
            passenger_email='asha@example.com',
            passenger_phone='+919812345678',
            seat_count=2,
            total_amount=Decimal('5000.00'),
        )

        # Act
        masked = mask_sensitive(booking)

        # Assert
        assert isinstance(masked, str)
        assert 'asha@example.com' not in masked
        assert '+919812345678' not in masked
        assert f"passenger_email='{MASK}'" in masked
        assert "reservation_code='PNR123456'" in masked

    def test_returns_data_untouched_when_nothing_to_mask(self) -> None:
        data = {'schedule_id': 1}

        assert mask_sensitive(data) is data
        assert mask_sensitive(3) == 3
        assert mask_sensitive(None) is None

    def test_io_logger_masks_sensitive_kwargs(self) -> None:
        io = LoguruIO(custom_logger, truncate_content=False)

        masked = io.mask_sensitive({'to': 'asha@example.com', 'reservation_code': 'PNR123456'})

        assert masked == {'to': MASK, 'reservation_code': 'PNR123456'}

    def test_truncate_long_content(self) -> None:
        truncated = truncate_content('x' * 30, limit=10)

        assert truncated == 'xxxxxxxxxx...(truncated 20 chars)'


@pytest.mark.unit
class TestLoggerIO:
    def test_sync_function_returns_value(self) -> None:
        @Logger.io
        def add(a: int, b: int) -> int:
            return a + b

        assert add(2, 3) == 5

    @pytest.mark.asyncio
    async def test_async_function_reraises_domain_error_once_logged(self) -> None:
        @Logger.io
        async def lookup(*, schedule_id: int) -> None:
            raise NotFoundError(f'Schedule not found with id: {schedule_id}')

        with pytest.raises(NotFoundError) as exc_info:
            await lookup(schedule_id=9)

        assert getattr(exc_info.value, '_has_logged', False)


@pytest.mark.unit
class TestHttpStatusLevel:
    @pytest.mark.parametrize(
        'message,expected',
        [
            ('127.0.0.1 - "GET /api/booking/1 HTTP/1.1" - 200 - 8ms', 'SUCCESS'),
            ('127.0.0.1 - "POST /api/booking HTTP/1.1" - 409 - 3ms', 'ERROR'),
            ('127.0.0.1 - "GET / HTTP/1.1" - 307 - 1ms', 'WARNING'),
            ('127.0.0.1 - "GET /health HTTP/1.1" - 503 - 1ms', 'CRITICAL'),
            ('worker started', None),
        ],
    )
    def test_parse_status_level(self, message: str, expected: str | None) -> None:
        assert _parse_http_status_level(message) == expected
