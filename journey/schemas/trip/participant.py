from pydantic import BaseModel, EmailStr
from typing import List, Optional
from uuid import UUID

# 📨 Body of POST /trips/{trip_id}/invites
class InviteParticipantRequest(BaseModel):
    email: EmailStr


class ParticipantOut(BaseModel):
    id: UUID
    # never populated in listings, the stored name is not exposed
    name: Optional[str] = None
    email: str
    is_confirmed: bool

    model_config = {
        "from_attributes": True
    }


class ParticipantsResponse(BaseModel):
    participants: List[ParticipantOut]
