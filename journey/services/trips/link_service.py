from sqlalchemy.ext.asyncio import AsyncSession
from journey.core.logger import logger
from journey.schemas.trip.link import LinkCreate, LinkCreateResponse, LinkOut, LinksResponse
from journey.services.store import TripStore, storage_errors
from journey.utils.normalize import parse_uuid


async def get_trip_links(db: AsyncSession, trip_id: str) -> LinksResponse:
    trip_uuid = parse_uuid(trip_id, "trip id")

    with storage_errors("failed to get trip links"):
        links = await TripStore(db).get_trip_links(trip_uuid)

    return LinksResponse(links=[LinkOut.model_validate(link) for link in links])


async def create_trip_link(db: AsyncSession, trip_id: str, link_data: LinkCreate) -> LinkCreateResponse:
    trip_uuid = parse_uuid(trip_id, "trip id")

    with storage_errors("failed to create link"):
        link_id = await TripStore(db).create_trip_link(trip_uuid, link_data.title, link_data.url)

    logger.info(f"Link {link_id} created for trip {trip_id}")
    return LinkCreateResponse(link_id=str(link_id))
