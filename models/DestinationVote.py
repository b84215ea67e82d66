from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database import Base

class DestinationVote(Base):
    __tablename__ = "destination_votes"
    __table_args__ = (
        UniqueConstraint("pitch_id", "user_id", name="uq_destination_vote"),
    )

    id = Column(Integer, primary_key=True, index=True)
    pitch_id = Column(Integer, ForeignKey("destination_pitches.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    ranking = Column(Integer, nullable=False)  # 1 = first choice
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    pitch = relationship("DestinationPitch", back_populates="votes")
    user = relationship("User")
