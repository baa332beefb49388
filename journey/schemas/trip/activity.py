from pydantic import BaseModel, Field
from datetime import date as dt, datetime
from typing import List
from uuid import UUID
from journey.schemas.trip.trip_schema import WallClock


class ActivityCreate(BaseModel):
    title: str = Field(..., min_length=1)
    occurs_at: WallClock

class ActivityCreateResponse(BaseModel):
    activity_id: str

class ActivityOut(BaseModel):
    id: UUID
    title: str
    occurs_at: datetime

    class Config:
        from_attributes = True

class ActivityDay(BaseModel):
    date: dt
    activities: List[ActivityOut] = []

class ActivitiesResponse(BaseModel):
    activities: List[ActivityDay]
