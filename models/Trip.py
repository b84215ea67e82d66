from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SQLEnum, func
from sqlalchemy.orm import relationship
from database import Base
import enum

class TripPhase(str, enum.Enum):
    DATES = "DATES"
    DESTINATION = "DESTINATION"
    TRAVEL_CONFIRMATION = "TRAVEL_CONFIRMATION"
    COMPLETED = "COMPLETED"


# Fixed order; a trip only ever moves forward through it
PHASE_SEQUENCE = [
    TripPhase.DATES,
    TripPhase.DESTINATION,
    TripPhase.TRAVEL_CONFIRMATION,
    TripPhase.COMPLETED,
]


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    organizer_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(150), nullable=False)
    description = Column(Text)
    phase = Column(SQLEnum(TripPhase), default=TripPhase.DATES, nullable=False, index=True)
    date_pitch_deadline = Column(DateTime(timezone=True), nullable=True)
    voting_deadline_duration_days = Column(Integer, default=7, nullable=False)
    join_token = Column(String(64), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    organizer = relationship("User", lazy="joined")
    participants = relationship("TripParticipant", back_populates="trip", cascade="all, delete-orphan")
    date_pitches = relationship("DatePitch", back_populates="trip", cascade="all, delete-orphan")
    destination_pitches = relationship("DestinationPitch", back_populates="trip", cascade="all, delete-orphan")
    travel_confirmations = relationship("TravelConfirmation", back_populates="trip", cascade="all, delete-orphan")
    activities = relationship("Activity", back_populates="trip", cascade="all, delete-orphan")
