from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from models.DateVote import DateVote
from schemas import DatePitchWrite, DatePitchRead, DateVoteWrite, DateVoteRead, BestDateRangeRead
from database import get_db
from routes.deps import get_current_user
from services.clock import Clock, get_clock
from services.date_pitches import (
    DatePitchSummary,
    create_date_pitch,
    get_date_pitch_summary,
    list_date_pitches,
    summarize,
)
from services.date_tally import BestDateRange
from services.date_votes import cast_date_vote

router = APIRouter(prefix="/trips/{trip_id}/date-pitches", tags=["Date Pitches"])


def _vote_to_read(vote: DateVote) -> dict:
    return {
        "id": vote.id,
        "pitch_id": vote.pitch_id,
        "user_id": vote.user_id,
        "username": vote.user.username if vote.user else None,
        "vote_type": vote.vote_type.value,
        "selected_dates": vote.selected_date_list,
        "updated_at": vote.updated_at,
    }


def _results_to_read(results: BestDateRange | None) -> dict | None:
    if results is None:
        return None
    return {
        "start_date": results.start_date,
        "end_date": results.end_date,
        "score": results.score,
        "available_count": results.available_count,
        "dates": [
            {"date": day.date, "available": day.available, "unavailable": day.unavailable}
            for day in results.dates
        ],
        "fully_available": results.fully_available,
        "partially_available": results.partially_available,
        "unavailable": results.unavailable,
    }


def _summary_to_read(summary: DatePitchSummary) -> dict:
    """Helper to convert a pitch with its tally to a DatePitchRead dict"""
    pitch = summary.pitch
    return {
        "id": pitch.id,
        "trip_id": pitch.trip_id,
        "start_date": pitch.start_date,
        "end_date": pitch.end_date,
        "description": pitch.description,
        "pitched_by": (
            {"id": pitch.pitched_by.id, "username": pitch.pitched_by.username}
            if pitch.pitched_by else None
        ),
        "pitch_deadline": summary.deadlines.pitch_deadline,
        "voting_deadline": summary.deadlines.voting_deadline,
        "state": summary.state.value,
        "votes": [_vote_to_read(v) for v in pitch.votes],
        "results": _results_to_read(summary.results),
        "created_at": pitch.created_at,
    }


@router.post("/", response_model=DatePitchRead, status_code=status.HTTP_201_CREATED)
def create_pitch(
    trip_id: int,
    payload: DatePitchWrite,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Proponer un rango de fechas (solo participantes que van)"""
    now = clock.now()
    pitch = create_date_pitch(
        db, trip_id, payload.start_date, payload.end_date, payload.description, current_user, now
    )
    return _summary_to_read(summarize(pitch, now))


@router.get("/", response_model=List[DatePitchRead])
def list_pitches(
    trip_id: int,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Propuestas de fechas del viaje, las más recientes primero, con votos y resultados"""
    return [_summary_to_read(s) for s in list_date_pitches(db, trip_id, current_user, clock.now())]


router2 = APIRouter(prefix="/date-pitches", tags=["Date Pitches"])


@router2.post("/{pitch_id}/votes", response_model=DateVoteRead)
def vote_on_pitch(
    pitch_id: int,
    payload: DateVoteWrite,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Votar (o cambiar el voto) sobre una propuesta de fechas"""
    vote = cast_date_vote(db, pitch_id, payload.vote_type, payload.selected_dates, current_user, clock.now())
    return _vote_to_read(vote)


@router2.get("/{pitch_id}/results", response_model=Optional[BestDateRangeRead])
def get_pitch_results(
    pitch_id: int,
    current_user=Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Mejor rango de fechas según los votos; null si todavía no hay votos"""
    summary = get_date_pitch_summary(db, pitch_id, current_user, clock.now())
    return _results_to_read(summary.results)
