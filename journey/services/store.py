from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from journey.core.errors import ErrorKind, JourneyError
from journey.core.logger import logger
from journey.models.trips.activity import Activity
from journey.models.trips.link import Link
from journey.models.trips.participant import Participant
from journey.models.trips.trip_model import Trip
from journey.schemas.trip.trip_schema import TripCreate


class TripStore:
    """
    Typed CRUD over trips, participants, activities and links.

    Lookups return None for a missing row; database failures propagate as
    SQLAlchemyError after the session has been rolled back.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    # Trips

    async def create_trip(self, trip_data: TripCreate) -> UUID:
        """Insert the trip and one unconfirmed participant per invited email in one transaction."""
        new_trip = Trip(
            destination=trip_data.destination,
            starts_at=trip_data.starts_at,
            ends_at=trip_data.ends_at,
            owner_name=trip_data.owner_name,
            owner_email=trip_data.owner_email,
            is_confirmed=False,
        )
        self.db.add(new_trip)
        try:
            await self.db.flush()
            for email in trip_data.emails_to_invite:
                self.db.add(Participant(trip_id=new_trip.id, email=email, is_confirmed=False))
        except SQLAlchemyError:
            await self.db.rollback()
            raise

        await self._commit()
        return new_trip.id

    async def get_trip(self, trip_id: UUID, for_update: bool = False) -> Optional[Trip]:
        query = select(Trip).where(Trip.id == trip_id)
        if for_update:
            # row lock held until the caller's next commit
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def update_trip(
        self,
        trip_id: UUID,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        is_confirmed: bool,
    ) -> None:
        await self.db.execute(
            update(Trip)
            .where(Trip.id == trip_id)
            .values(
                destination=destination,
                starts_at=starts_at,
                ends_at=ends_at,
                is_confirmed=is_confirmed,
            )
        )
        await self._commit()

    # Participants

    async def get_participant(self, participant_id: UUID) -> Optional[Participant]:
        result = await self.db.execute(
            select(Participant).where(Participant.id == participant_id)
        )
        return result.scalar_one_or_none()

    async def confirm_participant(self, participant_id: UUID) -> int:
        """Flip is_confirmed only while it is still false; returns the number of rows changed."""
        result = await self.db.execute(
            update(Participant)
            .where(Participant.id == participant_id, Participant.is_confirmed.is_(False))
            .values(is_confirmed=True)
            .execution_options(synchronize_session=False)
        )
        await self._commit()
        return result.rowcount

    async def get_participants(self, trip_id: UUID) -> List[Participant]:
        result = await self.db.execute(
            select(Participant).where(Participant.trip_id == trip_id)
        )
        return list(result.scalars().all())

    async def invite_participant_to_trip(self, trip_id: UUID, email: str) -> UUID:
        participant = Participant(trip_id=trip_id, email=email, is_confirmed=False)
        self.db.add(participant)
        await self._commit()
        return participant.id

    # Activities

    async def get_trip_activities(self, trip_id: UUID) -> List[Activity]:
        result = await self.db.execute(
            select(Activity).where(Activity.trip_id == trip_id)
        )
        return list(result.scalars().all())

    async def create_activity(self, trip_id: UUID, title: str, occurs_at: datetime) -> UUID:
        activity = Activity(trip_id=trip_id, title=title, occurs_at=occurs_at)
        self.db.add(activity)
        await self._commit()
        return activity.id

    # Links

    async def get_trip_links(self, trip_id: UUID) -> List[Link]:
        result = await self.db.execute(
            select(Link).where(Link.trip_id == trip_id)
        )
        return list(result.scalars().all())

    async def create_trip_link(self, trip_id: UUID, title: str, url: str) -> UUID:
        link = Link(trip_id=trip_id, title=title, url=url)
        self.db.add(link)
        await self._commit()
        return link.id


@contextmanager
def storage_errors(message: str):
    """Turn a database failure inside the block into a STORAGE_FAILURE client error."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{message}: {e}")
        raise JourneyError(ErrorKind.STORAGE_FAILURE, message) from e
