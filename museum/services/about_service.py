# museum/services/about_service.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from museum.data.models.about import AboutContentModel


class AboutService:
    def __init__(self, db: Session):
        self.db = db

    def get_current(self) -> AboutContentModel | None:
        # najnowszy wpis wygrywa
        return self.db.execute(
            select(AboutContentModel)
            .order_by(AboutContentModel.created_at.desc(), AboutContentModel.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def publish(self, **fields) -> AboutContentModel:
        content = AboutContentModel(**fields)
        self.db.add(content)
        self.db.flush()
        return content
