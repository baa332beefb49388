from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from journey.core.config import settings
from journey.core.database import get_db
from journey.dependencies.notifications import get_dispatcher, get_mailer
from journey.schemas.trip.participant import InviteParticipantRequest, ParticipantsResponse
from journey.services.trips.participant_service import ParticipantService

router = APIRouter(prefix="/participants", tags=["Participants"])
trip_participants_router = APIRouter(prefix="/trips", tags=["Participants"])


async def get_participant_service(
    mailer=Depends(get_mailer),
    dispatcher=Depends(get_dispatcher)
) -> ParticipantService:
    return ParticipantService(mailer, dispatcher, notify_invites=settings.NOTIFY_INVITED_PARTICIPANTS)


@router.patch("/{participant_id}/confirm", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def confirm_participant(
    participant_id: str,
    db: AsyncSession = Depends(get_db),
    participant_service: ParticipantService = Depends(get_participant_service)
):
    await participant_service.confirm_participant(db, participant_id)


@trip_participants_router.post("/{trip_id}/invites", status_code=status.HTTP_201_CREATED, response_class=Response)
async def invite_participant(
    trip_id: str,
    invite: InviteParticipantRequest,
    db: AsyncSession = Depends(get_db),
    participant_service: ParticipantService = Depends(get_participant_service)
):
    await participant_service.invite_participant(db, trip_id, invite)
    return Response(status_code=status.HTTP_201_CREATED)


@trip_participants_router.get("/{trip_id}/participants", response_model=ParticipantsResponse)
async def list_trip_participants(
    trip_id: str,
    db: AsyncSession = Depends(get_db),
    participant_service: ParticipantService = Depends(get_participant_service)
):
    return await participant_service.get_trip_participants(db, trip_id)
