from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from journey.core.database import Base
import uuid

class Link(Base):
    __tablename__ = "links"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    url = Column(String, nullable=False)

    trip = relationship("Trip", back_populates="links")
