# museum/repos/tour_repo.py
from datetime import date
from typing import List

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from museum.data.models.tour_registration import TourRegistrationModel
from museum.data.models.tour_slot import TourSlotModel


class TourRepo:
    def __init__(self, db: Session):
        self.db = db

    def booked_count(self, preferred_date: date, preferred_slot: str) -> int:
        total = self.db.execute(
            select(
                func.coalesce(
                    func.sum(TourRegistrationModel.adults_count + TourRegistrationModel.students_count),
                    0,
                )
            ).where(
                TourRegistrationModel.preferred_date == preferred_date,
                TourRegistrationModel.preferred_slot == preferred_slot,
            )
        ).scalar_one()
        return int(total)

    def get_or_create_slot(self, preferred_date: date, preferred_slot: str) -> TourSlotModel:
        stmt = select(TourSlotModel).where(
            TourSlotModel.preferred_date == preferred_date,
            TourSlotModel.preferred_slot == preferred_slot,
        )
        slot = self.db.execute(stmt).scalar_one_or_none()
        if slot:
            return slot

        # rownolegly insert tego samego slotu konczy sie IntegrityError (unique)
        slot = TourSlotModel(
            preferred_date=preferred_date,
            preferred_slot=preferred_slot,
            booked=0,
            version=1,
        )
        self.db.add(slot)
        self.db.flush()
        return slot

    def bump_slot(self, slot_id: int, old_version: int, attendees: int) -> int:
        # update ... set version = old + 1 where id = ? and version = old
        result = self.db.execute(
            update(TourSlotModel)
            .where(
                TourSlotModel.id == slot_id,
                TourSlotModel.version == old_version,
            )
            .values(
                booked=TourSlotModel.booked + attendees,
                version=old_version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def add_registration(self, registration: TourRegistrationModel) -> TourRegistrationModel:
        self.db.add(registration)
        self.db.flush()
        return registration

    def latest_registrations(self) -> List[TourRegistrationModel]:
        return list(
            self.db.execute(
                select(TourRegistrationModel).order_by(
                    TourRegistrationModel.created_at.desc(),
                    TourRegistrationModel.id.desc(),
                )
            ).scalars().all()
        )

    def list_registrations(
        self,
        on: date | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> List[TourRegistrationModel]:
        stmt = select(TourRegistrationModel).order_by(
            TourRegistrationModel.preferred_date,
            TourRegistrationModel.preferred_slot,
            TourRegistrationModel.created_at,
            TourRegistrationModel.id,
        )
        if on is not None:
            stmt = stmt.where(TourRegistrationModel.preferred_date == on)
        if date_from is not None:
            stmt = stmt.where(TourRegistrationModel.preferred_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(TourRegistrationModel.preferred_date <= date_to)
        return list(self.db.execute(stmt).scalars().all())

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
