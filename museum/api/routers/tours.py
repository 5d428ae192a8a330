# museum/api/routers/tours.py
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from museum.api.errors import DOMAIN_ERRORS, http_error
from museum.data.database import get_db
from museum.domain.schemas import (
    AvailabilityOut,
    TourRegistrationCreated,
    TourRegistrationIn,
    TourRegistrationOut,
)
from museum.services.booking_service import BookingService, CONFIRMATION_MESSAGE

router = APIRouter(prefix="/tour-registrations", tags=["tours"])


@router.get("", response_model=List[TourRegistrationOut])
def list_registrations(db: Session = Depends(get_db)):
    # najnowsze zgloszenia najpierw
    return BookingService(db).latest_registrations()


@router.post("", response_model=TourRegistrationCreated, status_code=201)
def create_registration(payload: TourRegistrationIn, db: Session = Depends(get_db)):
    svc = BookingService(db)
    try:
        registration = svc.register(payload)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": CONFIRMATION_MESSAGE, "data": registration}


@router.get("/availability", response_model=AvailabilityOut)
def availability(
    preferred_date: date = Query(...),
    preferred_slot: str = Query(..., min_length=1, max_length=50),
    db: Session = Depends(get_db),
):
    return BookingService(db).availability(preferred_date, preferred_slot)
