# museum/api/routers/about.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from museum.data.database import get_db
from museum.domain.schemas import AboutEnvelope
from museum.services.about_service import AboutService

router = APIRouter(tags=["about"])


@router.get("/about", response_model=AboutEnvelope)
def about(db: Session = Depends(get_db)):
    content = AboutService(db).get_current()
    if not content:
        return {"data": None, "message": "About content is not configured yet."}
    return {"data": content}
