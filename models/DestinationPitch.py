from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

class DestinationPitch(Base):
    __tablename__ = "destination_pitches"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    pitched_by_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    location = Column(String(250), nullable=False)
    description = Column(Text, nullable=True)
    lat = Column(Float, nullable=True)  # Filled by geocoding when enabled
    lng = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    trip = relationship("Trip", back_populates="destination_pitches")
    pitched_by = relationship("User")
    votes = relationship("DestinationVote", back_populates="pitch", cascade="all, delete-orphan", order_by="DestinationVote.id")
