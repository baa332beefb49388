"""
Confirmation emails for trip owners and participants.

Each send looks the trip (and participant) up through its own session,
renders a plain-text template and hands it to the SMTP transport on a worker
thread. Any failing step raises ``MailerError`` naming that step; nothing is
retried.
"""

import asyncio
import smtplib
from typing import Callable
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import SQLAlchemyError

from journey.core.database import SessionLocal
from journey.services.email_service import send_email_text
from journey.services.store import TripStore

SUBJECT = "Confirm your trip!"

OWNER_TEMPLATE = """
Hello, {name}

Your trip to {destination} starting on {start_date} needs to be confirmed.
Click the button below to confirm it.
"""

PARTICIPANT_TEMPLATE = """
Hello, Guest

Your trip to {destination} starting on {start_date} needs to be confirmed.
Click the button below to confirm it.
"""


class MailerError(Exception):
    """A confirmation email could not be composed or delivered."""


class Mailer:
    def __init__(
        self,
        session_factory=SessionLocal,
        transport: Callable[[str, str, str], None] = send_email_text,
    ):
        self.session_factory = session_factory
        self.transport = transport

    async def send_confirm_trip_email_to_trip_owner(self, trip_id: UUID) -> None:
        operation = "send_confirm_trip_email_to_trip_owner"
        try:
            async with self.session_factory() as db:
                trip = await TripStore(db).get_trip(trip_id)
        except SQLAlchemyError as e:
            raise MailerError(f"mailer failed to get trip for {operation}: {e}") from e
        if trip is None:
            raise MailerError(f"mailer failed to get trip for {operation}: trip {trip_id} not found")

        recipient = self._validate_recipient(trip.owner_email, operation)
        body = OWNER_TEMPLATE.format(
            name=trip.owner_name,
            destination=trip.destination,
            start_date=trip.starts_at.date().isoformat(),
        )
        await self._deliver(recipient, body, operation)

    async def send_confirm_trip_email_to_trip_participant(self, participant_id: UUID, trip_id: UUID) -> None:
        operation = "send_confirm_trip_email_to_trip_participant"
        try:
            async with self.session_factory() as db:
                store = TripStore(db)
                participant = await store.get_participant(participant_id)
                if participant is None:
                    raise MailerError(
                        f"mailer failed to get participant for {operation}: participant {participant_id} not found"
                    )
                recipient = self._validate_recipient(participant.email, operation)

                trip = await store.get_trip(trip_id)
        except SQLAlchemyError as e:
            raise MailerError(f"mailer failed to look up trip data for {operation}: {e}") from e
        if trip is None:
            raise MailerError(f"mailer failed to get trip for {operation}: trip {trip_id} not found")

        body = PARTICIPANT_TEMPLATE.format(
            destination=trip.destination,
            start_date=trip.starts_at.date().isoformat(),
        )
        await self._deliver(recipient, body, operation)

    @staticmethod
    def _validate_recipient(address: str, operation: str) -> str:
        try:
            return validate_email(address, check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise MailerError(f"mailer failed to set To in email for {operation}: {e}") from e

    async def _deliver(self, recipient: str, body: str, operation: str) -> None:
        try:
            await asyncio.to_thread(self.transport, recipient, SUBJECT, body)
        except (smtplib.SMTPException, OSError) as e:
            raise MailerError(f"mailer failed to send email for {operation}: {e}") from e
