import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from models.DestinationPitch import DestinationPitch
from schemas import (
    DestinationPitchWrite,
    DestinationPitchRead,
    DestinationVoteWrite,
    DestinationVoteRead,
    DestinationBoardRead,
    DestinationResultsRead,
)
from database import get_db
from routes.deps import get_current_user
from services.destination_pitches import (
    attach_coordinates,
    cast_destination_vote,
    create_destination_pitch,
    destination_board,
)
from services.errors import Internal
from services.ranked_choice import RunoffResult
from utils.geocoding_helpers import geocode_place_to_coords

logger = logging.getLogger("tripplanner.geocoding")

router = APIRouter(prefix="/trips/{trip_id}/destination-pitches", tags=["Destination Pitches"])


def _destination_vote_to_read(vote) -> dict:
    return {
        "id": vote.id,
        "pitch_id": vote.pitch_id,
        "user_id": vote.user_id,
        "username": vote.user.username if vote.user else None,
        "ranking": vote.ranking,
    }


def _destination_to_read(pitch: DestinationPitch) -> dict:
    return {
        "id": pitch.id,
        "trip_id": pitch.trip_id,
        "location": pitch.location,
        "description": pitch.description,
        "lat": pitch.lat,
        "lng": pitch.lng,
        "pitched_by": (
            {"id": pitch.pitched_by.id, "username": pitch.pitched_by.username}
            if pitch.pitched_by else None
        ),
        "votes": [_destination_vote_to_read(v) for v in pitch.votes],
        "created_at": pitch.created_at,
    }


def _runoff_to_read(result: RunoffResult) -> dict:
    return {
        "winner_pitch_id": result.winner,
        "total_ballots": result.total_ballots,
        "rounds": [
            {"counts": r.counts, "active_ballots": r.active_ballots, "eliminated": r.eliminated}
            for r in result.rounds
        ],
    }


@router.post("/", response_model=DestinationPitchRead, status_code=status.HTTP_201_CREATED)
async def create_pitch(
    trip_id: int,
    payload: DestinationPitchWrite,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Proponer un destino; las coordenadas se completan si el geocoding está activo"""
    pitch = create_destination_pitch(db, trip_id, payload.location, payload.description, current_user)

    result = await geocode_place_to_coords(payload.location)
    if result:
        lat, lon, _ = result
        try:
            pitch = attach_coordinates(db, pitch, lat, lon)
        except Internal as exc:
            # the pitch is already saved; it just stays without coordinates
            logger.warning("Could not store coordinates for destination pitch %s: %s", pitch.id, exc)
            db.refresh(pitch)

    return _destination_to_read(pitch)


@router.get("/", response_model=DestinationBoardRead)
def list_pitches(
    trip_id: int,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    board = destination_board(db, trip_id, current_user)
    return {
        "pitches": [_destination_to_read(p) for p in board.pitches],
        "results": _runoff_to_read(board.results),
    }


@router.get("/results", response_model=DestinationResultsRead)
def get_results(
    trip_id: int,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Resultado de la votación por orden de preferencia (segunda vuelta instantánea)"""
    return _runoff_to_read(destination_board(db, trip_id, current_user).results)


router2 = APIRouter(prefix="/destination-pitches", tags=["Destination Pitches"])


@router2.post("/{pitch_id}/votes", response_model=DestinationVoteRead)
def vote_on_pitch(
    pitch_id: int,
    payload: DestinationVoteWrite,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    vote = cast_destination_vote(db, pitch_id, payload.ranking, current_user)
    return _destination_vote_to_read(vote)
