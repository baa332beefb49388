"""Tests for confirmation emails and the detached dispatcher."""

import asyncio
import logging
import smtplib
import uuid
from datetime import datetime

import pytest

from journey.schemas.trip.trip_schema import TripCreate
from journey.services.mailer import Mailer, MailerError
from journey.services.notifications import NotificationDispatcher
from journey.services.store import TripStore


async def _create_trip(session_factory, **overrides):
    data = {
        "destination": "Salvador",
        "starts_at": datetime(2024, 2, 9, 14, 30),
        "ends_at": datetime(2024, 2, 14, 9, 0),
        "emails_to_invite": ["guest@example.com"],
        "owner_name": "Diego",
        "owner_email": "diego@example.com",
    }
    data.update(overrides)
    async with session_factory() as db:
        store = TripStore(db)
        trip_id = await store.create_trip(TripCreate(**data))
        participant = (await store.get_participants(trip_id))[0]
        return trip_id, participant.id


@pytest.mark.asyncio
async def test_owner_email_uses_trip_details(session_factory, mailer, transport):
    trip_id, _ = await _create_trip(session_factory)

    await mailer.send_confirm_trip_email_to_trip_owner(trip_id)

    assert len(transport.sent) == 1
    message = transport.sent[0]
    assert message["to"] == "diego@example.com"
    assert message["subject"] == "Confirm your trip!"
    assert "Hello, Diego" in message["body"]
    assert "Salvador" in message["body"]
    assert "2024-02-09" in message["body"]


@pytest.mark.asyncio
async def test_participant_email_greets_guest(session_factory, mailer, transport):
    trip_id, participant_id = await _create_trip(session_factory)

    await mailer.send_confirm_trip_email_to_trip_participant(participant_id, trip_id)

    message = transport.sent[0]
    assert message["to"] == "guest@example.com"
    assert "Hello, Guest" in message["body"]
    assert "Salvador" in message["body"]


@pytest.mark.asyncio
async def test_missing_trip_names_lookup_step(mailer, transport):
    with pytest.raises(MailerError, match="failed to get trip for send_confirm_trip_email_to_trip_owner"):
        await mailer.send_confirm_trip_email_to_trip_owner(uuid.uuid4())
    assert transport.sent == []


@pytest.mark.asyncio
async def test_missing_participant_names_lookup_step(session_factory, mailer):
    trip_id, _ = await _create_trip(session_factory)
    with pytest.raises(MailerError, match="failed to get participant"):
        await mailer.send_confirm_trip_email_to_trip_participant(uuid.uuid4(), trip_id)


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped(session_factory, mailer, transport):
    trip_id, _ = await _create_trip(session_factory)
    transport.error = smtplib.SMTPServerDisconnected("connection closed")

    with pytest.raises(MailerError, match="failed to send email") as exc_info:
        await mailer.send_confirm_trip_email_to_trip_owner(trip_id)
    assert isinstance(exc_info.value.__cause__, smtplib.SMTPServerDisconnected)


@pytest.mark.asyncio
async def test_invalid_recipient_is_rejected_before_sending(session_factory, transport):
    sent = []
    mailer = Mailer(session_factory=session_factory, transport=lambda *args: sent.append(args))
    trip_id, _ = await _create_trip(session_factory)

    async with session_factory() as db:
        trip = await TripStore(db).get_trip(trip_id)
        trip.owner_email = "not an address"
        await db.commit()

    with pytest.raises(MailerError, match="failed to set To"):
        await mailer.send_confirm_trip_email_to_trip_owner(trip_id)
    assert sent == []


@pytest.mark.asyncio
async def test_dispatcher_logs_failures_without_raising(caplog):
    dispatcher = NotificationDispatcher()

    async def failing_send():
        raise MailerError("mailer failed to send email for send_confirm_trip_email_to_trip_owner: boom")

    with caplog.at_level(logging.ERROR, logger="journey"):
        task = dispatcher.dispatch(failing_send(), "create_trip", trip_id="abc")
        await dispatcher.drain()

    assert task.done()
    assert task.exception() is None
    assert "Failed to send email on create_trip" in caplog.text
    assert "abc" in caplog.text
    assert dispatcher.pending == 0


@pytest.mark.asyncio
async def test_dispatcher_does_not_block_caller():
    dispatcher = NotificationDispatcher()
    release = asyncio.Event()

    async def slow_send():
        await release.wait()

    dispatcher.dispatch(slow_send(), "create_trip")
    assert dispatcher.pending == 1

    release.set()
    await dispatcher.drain()
    assert dispatcher.pending == 0
