from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from journey.core.database import get_db
from journey.schemas.trip.activity import ActivitiesResponse, ActivityCreate, ActivityCreateResponse
from journey.services.trips.activity_service import create_activity, get_trip_activities

router = APIRouter(prefix="/trips", tags=["Activities"])

# 🔹 Activities grouped by day
@router.get("/{trip_id}/activities", response_model=ActivitiesResponse)
async def list_trip_activities(
    trip_id: str,
    db: AsyncSession = Depends(get_db)
):
    return await get_trip_activities(db, trip_id)

@router.post("/{trip_id}/activities", response_model=ActivityCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_activity(
    trip_id: str,
    activity_data: ActivityCreate,
    db: AsyncSession = Depends(get_db)
):
    return await create_activity(db, trip_id, activity_data)
