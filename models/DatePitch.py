from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

class DatePitch(Base):
    __tablename__ = "date_pitches"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    pitched_by_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    # Trip settings as they were when the pitch was created
    pitch_deadline = Column(DateTime(timezone=True), nullable=False)
    voting_deadline = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    trip = relationship("Trip", back_populates="date_pitches")
    pitched_by = relationship("User")
    votes = relationship("DateVote", back_populates="pitch", cascade="all, delete-orphan", order_by="DateVote.id")
