from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from models.TravelConfirmation import TravelConfirmation
from schemas import TravelConfirmationWrite, TravelConfirmationRead
from database import get_db
from routes.deps import get_current_user
from services.travel import confirm_travel, list_travel_confirmations

router = APIRouter(prefix="/trips/{trip_id}/travel-confirmations", tags=["Travel Confirmations"])


def _confirmation_to_read(confirmation: TravelConfirmation) -> dict:
    return {
        "id": confirmation.id,
        "trip_id": confirmation.trip_id,
        "user_id": confirmation.user_id,
        "username": confirmation.user.username if confirmation.user else None,
        "is_booked": confirmation.is_booked,
        "notes": confirmation.notes,
        "updated_at": confirmation.updated_at,
    }


@router.post("/", response_model=TravelConfirmationRead)
def confirm(
    trip_id: int,
    payload: TravelConfirmationWrite,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Confirmar (o actualizar) si el viaje ya está reservado"""
    confirmation = confirm_travel(db, trip_id, payload.is_booked, payload.notes, current_user)
    return _confirmation_to_read(confirmation)


@router.get("/", response_model=List[TravelConfirmationRead])
def list_confirmations(
    trip_id: int,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [_confirmation_to_read(c) for c in list_travel_confirmations(db, trip_id, current_user)]
