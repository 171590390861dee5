"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.train_booking.domain.reservation_code_generator import ReservationCodeGenerator
from src.service.train_booking.driven_adapter.notification.mock_email_sender_impl import (
    MockEmailSenderImpl,
)
from src.service.train_booking.driven_adapter.notification.notification_dispatcher_impl import (
    NotificationDispatcherImpl,
)
from src.service.train_booking.driven_adapter.repo.booking_ledger_impl import BookingLedgerImpl
from src.service.train_booking.driven_adapter.repo.schedule_catalog_impl import (
    ScheduleCatalogImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (engine + session maker, created lazily on first use)
    database = providers.Singleton(Database)

    # Unit of Work: one instance (one transaction) per use case call
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork,
        session_factory=database.provided.session_maker,
        seat_adjust_max_retries=config_service.provided.SEAT_ADJUST_MAX_RETRIES,
    )

    # Repositories for reads outside a UoW (stateless - use session_factory per call)
    schedule_catalog = providers.Singleton(
        ScheduleCatalogImpl,
        session_factory=database.provided.session,
        max_retries=config_service.provided.SEAT_ADJUST_MAX_RETRIES,
    )
    booking_ledger = providers.Singleton(
        BookingLedgerImpl, session_factory=database.provided.session
    )

    # Domain services
    reservation_code_generator = providers.Singleton(
        ReservationCodeGenerator,
        prefix=config_service.provided.RESERVATION_CODE_PREFIX,
        digits=config_service.provided.RESERVATION_CODE_DIGITS,
        max_attempts=config_service.provided.RESERVATION_CODE_MAX_ATTEMPTS,
    )

    # Notifications (worker started by main.py lifespan)
    notification_sender = providers.Singleton(MockEmailSenderImpl)
    notification_dispatcher = providers.Singleton(
        NotificationDispatcherImpl,
        sender=notification_sender,
        max_buffer_size=config_service.provided.NOTIFICATION_QUEUE_SIZE,
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
