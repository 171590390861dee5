"""Mock email sender: renders passenger emails and logs them instead of sending."""

from collections import deque
from datetime import datetime, timezone
from typing import Deque

from src.platform.logging.loguru_io import Logger
from src.service.train_booking.app.interface.i_notification_sender import INotificationSender


class MockEmailSenderImpl(INotificationSender):
    def __init__(self, *, debug: bool = True, max_recorded: int = 100) -> None:
        self.debug = debug
        # Most recent emails only, oldest dropped first
        self.sent_emails: Deque[dict] = deque(maxlen=max_recorded)

    async def _send(self, *, to: str, subject: str, body: str) -> None:
        email_data = {
            'to': to,
            'subject': subject,
            'body': body,
            'sent_at': datetime.now(timezone.utc),
        }
        self.sent_emails.append(email_data)

        if self.debug:
            Logger.base.info(f'📧 [MOCK EMAIL] subject="{subject}"\n{body}')

    @Logger.io
    async def send_booking_confirmation(
        self, *, to: str, passenger_name: str, reservation_code: str, trip_summary: str
    ) -> None:
        subject = f'Booking Confirmation - PNR: {reservation_code}'
        body = (
            f'Dear {passenger_name},\n\n'
            'Your train booking has been confirmed!\n\n'
            f'PNR Number: {reservation_code}\n'
            f'Train Details: {trip_summary}\n\n'
            'Please keep this PNR number for future reference.\n\n'
            'Thank you for choosing our service!\n\n'
            'Best regards,\n'
            'Train Booking System'
        )
        await self._send(to=to, subject=subject, body=body)

    @Logger.io
    async def send_cancellation(self, *, to: str, passenger_name: str, reservation_code: str) -> None:
        subject = f'Booking Cancellation - PNR: {reservation_code}'
        body = (
            f'Dear {passenger_name},\n\n'
            f'Your train booking with PNR {reservation_code} has been cancelled successfully.\n\n'
            'If you have any questions, please contact our customer service.\n\n'
            'Thank you for using our service!\n\n'
            'Best regards,\n'
            'Train Booking System'
        )
        await self._send(to=to, subject=subject, body=body)
