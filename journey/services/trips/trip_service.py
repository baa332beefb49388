from sqlalchemy.ext.asyncio import AsyncSession
from journey.core.errors import ErrorKind, JourneyError
from journey.core.logger import logger
from journey.schemas.trip.trip_schema import (
    TripCreate,
    TripCreateResponse,
    TripDetails,
    TripDetailsResponse,
    TripUpdate,
)
from journey.services.mailer import Mailer
from journey.services.notifications import NotificationDispatcher
from journey.services.store import TripStore, storage_errors
from journey.utils.normalize import parse_uuid

class TripService:
    def __init__(self, mailer: Mailer, dispatcher: NotificationDispatcher):
        self.mailer = mailer
        self.dispatcher = dispatcher

    async def create_trip(self, db: AsyncSession, trip_data: TripCreate) -> TripCreateResponse:
        store = TripStore(db)
        with storage_errors("failed to create trip, try again"):
            trip_id = await store.create_trip(trip_data)

        logger.info(f"Trip {trip_id} created for {trip_data.owner_email} with {len(trip_data.emails_to_invite)} invites")

        # the response never waits on the owner email
        self.dispatcher.dispatch(
            self.mailer.send_confirm_trip_email_to_trip_owner(trip_id),
            "create_trip",
            trip_id=str(trip_id),
        )
        return TripCreateResponse(trip_id=str(trip_id))

    async def get_trip(self, db: AsyncSession, trip_id: str) -> TripDetailsResponse:
        trip_uuid = parse_uuid(trip_id, "trip id")
        with storage_errors("failed to get trip, try again"):
            trip = await TripStore(db).get_trip(trip_uuid)

        if not trip:
            logger.warning(f"Trip not found: ID {trip_id}")
            raise JourneyError(ErrorKind.NOT_FOUND, "trip not found")

        return TripDetailsResponse(trip=TripDetails.model_validate(trip))

    async def update_trip(self, db: AsyncSession, trip_id: str, trip_update: TripUpdate) -> None:
        """Rewrite destination and dates; the confirmation flag is carried over from the stored trip."""
        trip_uuid = parse_uuid(trip_id, "trip id")
        store = TripStore(db)

        # read and write share one transaction, the row stays locked in between
        with storage_errors("failed to get trip to update"):
            trip = await store.get_trip(trip_uuid, for_update=True)
        if not trip:
            logger.warning(f"Update attempt on missing trip: ID {trip_id}")
            raise JourneyError(ErrorKind.NOT_FOUND, "trip not found to update")

        with storage_errors("trip update failed"):
            await store.update_trip(
                trip.id,
                destination=trip_update.destination,
                starts_at=trip_update.starts_at,
                ends_at=trip_update.ends_at,
                is_confirmed=trip.is_confirmed,
            )

        logger.info(f"Trip ID {trip_id} updated")

    async def confirm_trip(self, db: AsyncSession, trip_id: str) -> None:
        trip_uuid = parse_uuid(trip_id, "trip id")
        store = TripStore(db)

        with storage_errors("failed to get trip to confirm"):
            trip = await store.get_trip(trip_uuid, for_update=True)
        if not trip:
            logger.warning(f"Confirm attempt on missing trip: ID {trip_id}")
            raise JourneyError(ErrorKind.NOT_FOUND, "trip to confirm not found")

        with storage_errors("error when confirming trip"):
            await store.update_trip(
                trip.id,
                destination=trip.destination,
                starts_at=trip.starts_at,
                ends_at=trip.ends_at,
                is_confirmed=True,
            )

        logger.info(f"Trip ID {trip_id} confirmed")
