# museum/api/routers/admin.py
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from museum.api.security import require_admin
from museum.data.database import get_db
from museum.domain.schemas import AnalyticsOut, TourReportOut
from museum.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/analytics", response_model=AnalyticsOut)
def analytics(db: Session = Depends(get_db)):
    return AnalyticsService(db).dashboard()


@router.get("/tour-registrations", response_model=TourReportOut)
def tour_registrations(
    on: date | None = Query(default=None, alias="date"),
    date_from: date | None = Query(default=None, alias="from"),
    date_to: date | None = Query(default=None, alias="to"),
    db: Session = Depends(get_db),
):
    return AnalyticsService(db).tour_report(on=on, date_from=date_from, date_to=date_to)
