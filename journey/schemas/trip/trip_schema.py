from pydantic import AfterValidator, BaseModel, EmailStr, Field
from typing import Annotated, List
from datetime import datetime
from uuid import UUID


def _wall_clock(value: datetime) -> datetime:
    # timestamps are kept as entered, any offset is dropped
    return value.replace(tzinfo=None)

WallClock = Annotated[datetime, AfterValidator(_wall_clock)]

class TripBase(BaseModel):
    destination: str = Field(..., min_length=4)
    # ordering of starts_at/ends_at is not checked
    starts_at: WallClock
    ends_at: WallClock

class TripCreate(TripBase):
    emails_to_invite: List[EmailStr] = Field(default_factory=list)
    owner_name: str = Field(..., min_length=1)
    owner_email: EmailStr

class TripUpdate(TripBase):
    pass

class TripCreateResponse(BaseModel):
    trip_id: str

class TripDetails(TripBase):
    id: UUID
    is_confirmed: bool

    class Config:
        from_attributes = True

class TripDetailsResponse(BaseModel):
    trip: TripDetails
