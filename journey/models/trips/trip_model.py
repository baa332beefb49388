from sqlalchemy import Column, String, Boolean, DateTime, Uuid, func
from journey.core.database import Base
from sqlalchemy.orm import relationship
import uuid

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    destination = Column(String, nullable=False)
    starts_at = Column(DateTime, nullable=False)
    ends_at = Column(DateTime, nullable=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)
    owner_name = Column(String, nullable=False)
    owner_email = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    participants = relationship("Participant", back_populates="trip", cascade="all, delete")
    activities = relationship("Activity", back_populates="trip", cascade="all, delete")
    links = relationship("Link", back_populates="trip", cascade="all, delete")

