"""
SQLAlchemy models; importing this package registers every table on Base.metadata
"""

from models.User import User
from models.Trip import Trip, TripPhase, PHASE_SEQUENCE
from models.TripParticipant import TripParticipant, RsvpStatus, ParticipantRole
from models.DatePitch import DatePitch
from models.DateVote import DateVote, DateVoteType
from models.DestinationPitch import DestinationPitch
from models.DestinationVote import DestinationVote
from models.TravelConfirmation import TravelConfirmation
from models.Activity import Activity, ActivityType

__all__ = [
    "User",
    "Trip",
    "TripPhase",
    "PHASE_SEQUENCE",
    "TripParticipant",
    "RsvpStatus",
    "ParticipantRole",
    "DatePitch",
    "DateVote",
    "DateVoteType",
    "DestinationPitch",
    "DestinationVote",
    "TravelConfirmation",
    "Activity",
    "ActivityType",
]
