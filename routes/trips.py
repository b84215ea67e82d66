from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from models.Trip import Trip
from models.TripParticipant import TripParticipant
from schemas import (
    TripWrite,
    TripUpdate,
    TripRead,
    TripDetailRead,
    ParticipantRead,
    RsvpWrite,
    DatePitchSettingsWrite,
)
from database import get_db
from routes.deps import get_current_user
from services import trips as trip_service
from services.clock import Clock, get_clock
from services.date_pitches import set_date_pitch_deadline
from services.deadline_clock import trip_deadlines, window_state

router = APIRouter(prefix="/trips", tags=["Trips"])


def _participant_to_read(participant: TripParticipant) -> dict:
    return {
        "user_id": participant.user_id,
        "username": participant.user.username if participant.user else None,
        "rsvp_status": participant.rsvp_status.value,
        "role": participant.role.value,
        "joined_at": participant.joined_at,
    }


def _trip_to_read(trip: Trip, clock: Clock, with_participants: bool = False) -> dict:
    """Helper to convert Trip to TripRead / TripDetailRead dict"""
    deadlines = trip_deadlines(trip)
    result = {
        "id": trip.id,
        "title": trip.title,
        "description": trip.description,
        "organizer_id": trip.organizer_id,
        "phase": trip.phase.value,
        "date_pitch_deadline": deadlines.pitch_deadline,
        "voting_deadline_duration_days": trip.voting_deadline_duration_days,
        "voting_deadline": deadlines.voting_deadline,
        "pitch_window": window_state(clock.now(), deadlines).value,
        "join_token": trip.join_token,
        "created_at": trip.created_at,
        "updated_at": trip.updated_at,
    }
    if with_participants:
        result["participants"] = [_participant_to_read(p) for p in trip.participants]
    return result


@router.post("/", response_model=TripRead, status_code=status.HTTP_201_CREATED)
def create_trip(
    payload: TripWrite,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Crear un viaje; el creador queda como organizador y va (GOING)"""
    trip = trip_service.create_trip(db, payload.title, payload.description, current_user)
    return _trip_to_read(trip, clock)


@router.get("/", response_model=List[TripRead])
def list_trips(
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Viajes donde el usuario es organizador o participante"""
    return [_trip_to_read(t, clock) for t in trip_service.list_trips(db, current_user)]


@router.get("/join/{token}", response_model=TripDetailRead)
def get_trip_by_join_token(
    token: str,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Vista previa del viaje a partir del enlace para unirse"""
    trip = trip_service.get_trip_by_join_token(db, token, current_user)
    return _trip_to_read(trip, clock, with_participants=True)


@router.post("/join/{token}", response_model=ParticipantRead)
def join_trip(
    token: str,
    payload: RsvpWrite,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Unirse a un viaje (o actualizar el RSVP si ya es participante)"""
    participant = trip_service.join_trip(db, token, payload.rsvp_status, current_user)
    return _participant_to_read(participant)


@router.get("/{trip_id}", response_model=TripDetailRead)
def get_trip(
    trip_id: int,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    trip = trip_service.get_trip(db, trip_id, current_user)
    return _trip_to_read(trip, clock, with_participants=True)


@router.put("/{trip_id}", response_model=TripRead)
def update_trip(
    trip_id: int,
    payload: TripUpdate,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Solo el organizador puede editar el viaje"""
    trip = trip_service.update_trip(db, trip_id, current_user, **payload.model_dump(exclude_unset=True))
    return _trip_to_read(trip, clock)


@router.put("/{trip_id}/rsvp", response_model=ParticipantRead)
def update_rsvp(
    trip_id: int,
    payload: RsvpWrite,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    participant = trip_service.update_rsvp(db, trip_id, payload.rsvp_status, current_user)
    return _participant_to_read(participant)


@router.get("/{trip_id}/participants", response_model=List[ParticipantRead])
def list_participants(
    trip_id: int,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [_participant_to_read(p) for p in trip_service.list_participants(db, trip_id, current_user)]


@router.put("/{trip_id}/date-pitch-settings", response_model=TripRead)
def update_date_pitch_settings(
    trip_id: int,
    payload: DatePitchSettingsWrite,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Fijar la fecha límite de propuestas y la duración de la votación (organizador)"""
    trip = set_date_pitch_deadline(
        db,
        trip_id,
        payload.date_pitch_deadline,
        payload.voting_deadline_duration_days,
        current_user,
        clock.now(),
    )
    return _trip_to_read(trip, clock)


@router.post("/{trip_id}/advance-phase", response_model=TripRead)
def advance_phase(
    trip_id: int,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Pasar a la siguiente fase de planificación (organizador)"""
    trip = trip_service.advance_phase(db, trip_id, current_user)
    return _trip_to_read(trip, clock)
