from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SQLEnum, func
from sqlalchemy.orm import relationship
from database import Base
import enum
import json

class ActivityType(str, enum.Enum):
    TRIP_CREATED = "TRIP_CREATED"
    USER_JOINED = "USER_JOINED"
    RSVP_CHANGED = "RSVP_CHANGED"
    DEADLINE_SET = "DEADLINE_SET"
    DATE_PITCH_CREATED = "DATE_PITCH_CREATED"
    DATE_VOTE_CAST = "DATE_VOTE_CAST"
    DESTINATION_PITCH_CREATED = "DESTINATION_PITCH_CREATED"
    DESTINATION_VOTE_CAST = "DESTINATION_VOTE_CAST"
    PHASE_CHANGED = "PHASE_CHANGED"
    TRAVEL_CONFIRMED = "TRAVEL_CONFIRMED"


class Activity(Base):
    """Append-only audit entry; rows are never updated or deleted."""
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(SQLEnum(ActivityType), nullable=False)
    # "metadata" is reserved on declarative classes
    metadata_json = Column("metadata", Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    trip = relationship("Trip", back_populates="activities")
    user = relationship("User")

    @property
    def details(self) -> dict:
        if not self.metadata_json:
            return {}
        return json.loads(self.metadata_json)
