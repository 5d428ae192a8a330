from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from museum.data.database import Base


class AboutContentModel(Base):
    __tablename__ = "about_contents"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    paragraph_one = Column(Text, nullable=True)
    paragraph_two = Column(Text, nullable=True)
    paragraph_three = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
