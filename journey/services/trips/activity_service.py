from sqlalchemy.ext.asyncio import AsyncSession
from journey.core.errors import ErrorKind, JourneyError
from journey.core.logger import logger
from journey.schemas.trip.activity import (
    ActivitiesResponse,
    ActivityCreate,
    ActivityCreateResponse,
    ActivityDay,
    ActivityOut,
)
from journey.services.store import TripStore, storage_errors
from journey.utils.normalize import group_activities_by_date, parse_uuid


async def get_trip_activities(db: AsyncSession, trip_id: str) -> ActivitiesResponse:
    trip_uuid = parse_uuid(trip_id, "trip id")

    with storage_errors("activities for this trip not found"):
        activities = await TripStore(db).get_trip_activities(trip_uuid)

    grouped = group_activities_by_date(activities)
    return ActivitiesResponse(
        activities=[
            ActivityDay(
                date=day,
                activities=[ActivityOut.model_validate(activity) for activity in day_activities],
            )
            for day, day_activities in grouped.items()
        ]
    )


async def create_activity(db: AsyncSession, trip_id: str, activity_data: ActivityCreate) -> ActivityCreateResponse:
    trip_uuid = parse_uuid(trip_id, "trip id")
    store = TripStore(db)

    with storage_errors("something went wrong with this trip"):
        trip = await store.get_trip(trip_uuid)
    if not trip:
        logger.warning(f"Activity creation for missing trip: ID {trip_id}")
        raise JourneyError(ErrorKind.NOT_FOUND, "trip not found")

    with storage_errors("failed to create activity"):
        activity_id = await store.create_activity(trip_uuid, activity_data.title, activity_data.occurs_at)

    logger.info(f"Activity {activity_id} created for trip {trip_id}")
    return ActivityCreateResponse(activity_id=str(activity_id))
