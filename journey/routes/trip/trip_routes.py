from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from journey.schemas.trip.trip_schema import TripCreate, TripUpdate, TripCreateResponse, TripDetailsResponse
from journey.core.database import get_db
from journey.dependencies.notifications import get_dispatcher, get_mailer
from journey.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=['Trips'])

async def get_trip_service(
    mailer=Depends(get_mailer),
    dispatcher=Depends(get_dispatcher)
) -> TripService:
    return TripService(mailer, dispatcher)

@router.post("", response_model=TripCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_route(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.create_trip(db, trip)

@router.get("/{trip_id}", response_model=TripDetailsResponse)
async def get_trip(
    trip_id: str,
    session: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.get_trip(session, trip_id)

@router.put("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_trip_route(
    trip_id: str,
    trip_update: TripUpdate,
    session: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    await trip_service.update_trip(session, trip_id, trip_update)

@router.get("/{trip_id}/confirm", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def confirm_trip_route(
    trip_id: str,
    session: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    await trip_service.confirm_trip(session, trip_id)
