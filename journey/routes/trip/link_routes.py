from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from journey.core.database import get_db
from journey.schemas.trip.link import LinkCreate, LinkCreateResponse, LinksResponse
from journey.services.trips.link_service import create_trip_link, get_trip_links

router = APIRouter(prefix="/trips", tags=["Links"])

@router.get("/{trip_id}/links", response_model=LinksResponse)
async def list_trip_links(
    trip_id: str,
    db: AsyncSession = Depends(get_db)
):
    return await get_trip_links(db, trip_id)

@router.post("/{trip_id}/links", response_model=LinkCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_link(
    trip_id: str,
    link_data: LinkCreate,
    db: AsyncSession = Depends(get_db)
):
    return await create_trip_link(db, trip_id, link_data)
