from sqlalchemy import Column, Date, Integer, String, UniqueConstraint

from museum.data.database import Base


class TourSlotModel(Base):
    """
    Licznik miejsc dla pary (data, slot).
    Zapis rezerwacji podbija version warunkowo (optimistic locking),
    wiec dwa rownolegle zgloszenia nie przepelnia slotu.
    """

    __tablename__ = "tour_slots"
    __table_args__ = (
        UniqueConstraint("preferred_date", "preferred_slot", name="u_tour_slot_date_slot"),
    )

    id = Column(Integer, primary_key=True)
    preferred_date = Column(Date, nullable=False)
    preferred_slot = Column(String(50), nullable=False)

    booked = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False, default=1)
