from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from journey.core.database import Base
import uuid

class Participant(Base):
    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String, nullable=False)
    name = Column(String, nullable=True)

    # false -> true only, see ParticipantService.confirm_participant
    is_confirmed = Column(Boolean, nullable=False, default=False)

    trip = relationship("Trip", back_populates="participants")
