from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, Enum as SQLEnum, func
from sqlalchemy.orm import relationship
from database import Base
from datetime import date
import enum
import json
import logging

logger = logging.getLogger("tripplanner.votes")


class DateVoteType(str, enum.Enum):
    ALL_WORK = "ALL_WORK"
    PARTIAL = "PARTIAL"
    NONE_WORK = "NONE_WORK"


class DateVote(Base):
    __tablename__ = "date_votes"
    __table_args__ = (
        UniqueConstraint("pitch_id", "user_id", name="uq_date_vote"),
    )

    id = Column(Integer, primary_key=True, index=True)
    pitch_id = Column(Integer, ForeignKey("date_pitches.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vote_type = Column(SQLEnum(DateVoteType), nullable=False)
    selected_dates = Column(Text, nullable=True)  # JSON list of ISO dates, PARTIAL only
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    pitch = relationship("DatePitch", back_populates="votes")
    user = relationship("User")

    @property
    def selected_date_list(self):
        """Stored selection as calendar dates, or None if it cannot be read."""
        if self.selected_dates is None:
            return None
        try:
            raw = json.loads(self.selected_dates)
            return [date.fromisoformat(value) for value in raw]
        except (TypeError, ValueError):
            logger.warning("Unreadable selected_dates on date vote %s: %r", self.id, self.selected_dates)
            return None

    def set_selected_dates(self, dates):
        if dates is None:
            self.selected_dates = None
        else:
            self.selected_dates = json.dumps([d.isoformat() for d in sorted(set(dates))])
