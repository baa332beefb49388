from sqlalchemy.ext.asyncio import AsyncSession
from journey.core.errors import ErrorKind, JourneyError
from journey.core.logger import logger
from journey.schemas.trip.participant import InviteParticipantRequest, ParticipantOut, ParticipantsResponse
from journey.services.mailer import Mailer
from journey.services.notifications import NotificationDispatcher
from journey.services.store import TripStore, storage_errors
from journey.utils.normalize import parse_uuid


class ParticipantService:
    def __init__(self, mailer: Mailer, dispatcher: NotificationDispatcher, notify_invites: bool = False):
        self.mailer = mailer
        self.dispatcher = dispatcher
        self.notify_invites = notify_invites

    async def confirm_participant(self, db: AsyncSession, participant_id: str) -> None:
        participant_uuid = parse_uuid(participant_id, "participant id")
        store = TripStore(db)

        with storage_errors("something went wrong, try again"):
            participant = await store.get_participant(participant_uuid)

        if not participant:
            raise JourneyError(ErrorKind.NOT_FOUND, "participant not found")

        # one-way transition, a second confirm is rejected
        if participant.is_confirmed:
            raise JourneyError(ErrorKind.ALREADY_CONFIRMED, "participant already confirmed")

        with storage_errors("something went wrong, try again"):
            confirmed = await store.confirm_participant(participant_uuid)

        # a concurrent confirm got there between the read and the update
        if not confirmed:
            raise JourneyError(ErrorKind.ALREADY_CONFIRMED, "participant already confirmed")

        logger.info(f"Participant {participant_id} confirmed for trip {participant.trip_id}")

    async def invite_participant(self, db: AsyncSession, trip_id: str, invite: InviteParticipantRequest) -> None:
        trip_uuid = parse_uuid(trip_id, "trip id")

        with storage_errors("failed to invite participant to the trip"):
            participant_id = await TripStore(db).invite_participant_to_trip(trip_uuid, invite.email)

        logger.info(f"Participant {participant_id} invited to trip {trip_id}")

        if self.notify_invites:
            self.dispatcher.dispatch(
                self.mailer.send_confirm_trip_email_to_trip_participant(participant_id, trip_uuid),
                "invite_participant",
                trip_id=trip_id,
                participant_id=str(participant_id),
            )

    async def get_trip_participants(self, db: AsyncSession, trip_id: str) -> ParticipantsResponse:
        trip_uuid = parse_uuid(trip_id, "trip id")

        with storage_errors("error getting the trip participants"):
            participants = await TripStore(db).get_participants(trip_uuid)

        return ParticipantsResponse(
            participants=[
                ParticipantOut(
                    id=participant.id,
                    name=None,
                    email=participant.email,
                    is_confirmed=participant.is_confirmed,
                )
                for participant in participants
            ]
        )
