# schemas.py (Pydantic v2)
from pydantic import BaseModel, EmailStr
from typing import Optional, List, Dict, Any
from datetime import date, datetime


# ---------- Users ----------
class UserBase(BaseModel):
    id: str
    username: str
    email: EmailStr

class UserWrite(UserBase):
    pass

class UserRead(UserBase):
    created_at: datetime

    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    id: str
    username: str

    class Config:
        from_attributes = True


# ---------- Trips ----------
class TripWrite(BaseModel):
    title: str
    description: Optional[str] = None

class TripUpdate(BaseModel):
    """Partial update, organizer only"""
    title: Optional[str] = None
    description: Optional[str] = None

class ParticipantRead(BaseModel):
    user_id: str
    username: Optional[str] = None
    rsvp_status: str
    role: str
    joined_at: datetime

class TripRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    organizer_id: str
    phase: str
    date_pitch_deadline: Optional[datetime] = None
    voting_deadline_duration_days: int
    voting_deadline: Optional[datetime] = None
    pitch_window: str
    join_token: str
    created_at: datetime
    updated_at: datetime

class TripDetailRead(TripRead):
    participants: List[ParticipantRead] = []


# ---------- Participation ----------
class RsvpWrite(BaseModel):
    # Validated by the service so the error carries the InvalidRsvpStatus code
    rsvp_status: str

class DatePitchSettingsWrite(BaseModel):
    date_pitch_deadline: datetime
    voting_deadline_duration_days: Optional[int] = None


# ---------- Date Pitches ----------
class DatePitchWrite(BaseModel):
    start_date: date
    end_date: date
    description: Optional[str] = None

class DateVoteWrite(BaseModel):
    vote_type: str
    selected_dates: Optional[List[str]] = None  # ISO dates, PARTIAL only

class DateVoteRead(BaseModel):
    id: int
    pitch_id: int
    user_id: str
    username: Optional[str] = None
    vote_type: str
    selected_dates: Optional[List[date]] = None
    updated_at: datetime

class DateAvailabilityRead(BaseModel):
    date: date
    available: List[str] = []
    unavailable: List[str] = []

class BestDateRangeRead(BaseModel):
    start_date: date
    end_date: date
    score: int
    available_count: int
    dates: List[DateAvailabilityRead] = []
    fully_available: List[str] = []
    partially_available: List[str] = []
    unavailable: List[str] = []

class DatePitchRead(BaseModel):
    id: int
    trip_id: int
    start_date: date
    end_date: date
    description: Optional[str] = None
    pitched_by: Optional[UserSummary] = None
    # Effective deadlines (live trip settings, else the snapshot taken at creation)
    pitch_deadline: Optional[datetime] = None
    voting_deadline: Optional[datetime] = None
    state: str
    votes: List[DateVoteRead] = []
    results: Optional[BestDateRangeRead] = None  # None until someone votes
    created_at: datetime


# ---------- Destination Pitches ----------
class DestinationPitchWrite(BaseModel):
    location: str
    description: Optional[str] = None

class DestinationVoteWrite(BaseModel):
    ranking: int  # 1 = first choice

class DestinationVoteRead(BaseModel):
    id: int
    pitch_id: int
    user_id: str
    username: Optional[str] = None
    ranking: int

class DestinationPitchRead(BaseModel):
    id: int
    trip_id: int
    location: str
    description: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    pitched_by: Optional[UserSummary] = None
    votes: List[DestinationVoteRead] = []
    created_at: datetime

class RunoffRoundRead(BaseModel):
    counts: Dict[int, int]
    active_ballots: int
    eliminated: Optional[int] = None

class DestinationResultsRead(BaseModel):
    winner_pitch_id: Optional[int] = None
    total_ballots: int
    rounds: List[RunoffRoundRead] = []

class DestinationBoardRead(BaseModel):
    pitches: List[DestinationPitchRead] = []
    results: DestinationResultsRead


# ---------- Travel Confirmations ----------
class TravelConfirmationWrite(BaseModel):
    is_booked: bool
    notes: Optional[str] = None

class TravelConfirmationRead(BaseModel):
    id: int
    trip_id: int
    user_id: str
    username: Optional[str] = None
    is_booked: bool
    notes: Optional[str] = None
    updated_at: datetime


# ---------- Activities ----------
class ActivityRead(BaseModel):
    id: int
    trip_id: int
    user_id: str
    username: Optional[str] = None
    type: str
    metadata: Dict[str, Any] = {}
    created_at: datetime
