from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text, Index

from museum.data.database import Base


class TourRegistrationModel(Base):
    __tablename__ = "tour_registrations"
    __table_args__ = (
        Index("ix_tour_registrations_date_slot", "preferred_date", "preferred_slot"),
    )

    id = Column(Integer, primary_key=True)
    contact_name = Column(String(120), nullable=False)
    email = Column(String(150), nullable=False)
    phone = Column(String(30), nullable=True)
    country_code = Column(String(5), nullable=True)
    organisation = Column(String(150), nullable=True)
    group_type = Column(String(50), nullable=False, default="individual")

    preferred_date = Column(Date, nullable=False)
    preferred_slot = Column(String(50), nullable=False)

    adults_count = Column(Integer, nullable=False, default=0)
    students_count = Column(Integer, nullable=False, default=0)
    needs_guided_tour = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    @property
    def visitors_count(self) -> int:
        return (self.adults_count or 0) + (self.students_count or 0)
