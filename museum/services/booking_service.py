# museum/services/booking_service.py
from datetime import date
from typing import Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from museum.data.models.tour_registration import TourRegistrationModel
from museum.domain.errors import ConcurrencyConflict, FieldValidationError
from museum.domain.schemas import TourRegistrationIn
from museum.domain.slots import remaining_capacity, slot_capacity
from museum.repos.tour_repo import TourRepo
from museum.utils.retry import conflict_retry
from museum.utils.logging import get_logger

logger = get_logger(__name__)

CONFIRMATION_MESSAGE = (
    "Your tour request has been received. Our team will confirm availability shortly."
)


class BookingService:
    """
    Rezerwacje zwiedzania z limitem miejsc na slot.

    Sprawdzenie pojemnosci i zapis zgloszenia ida w jednej transakcji.
    Licznik slotu (tour_slots) jest podbijany warunkowo po wersji,
    wiec rownolegle zgloszenie ktore przeczytalo stary stan dostaje konflikt,
    robi rollback i waliduje jeszcze raz na swiezych danych.
    """

    def __init__(self, db: Session):
        self.repo = TourRepo(db)

    #query
    def availability(self, preferred_date: date, preferred_slot: str) -> Dict[str, int | None]:
        capacity = slot_capacity(preferred_slot)
        booked = self.repo.booked_count(preferred_date, preferred_slot)
        return {
            "capacity": capacity,
            "booked": booked,
            "remaining": remaining_capacity(capacity, booked),
        }

    def latest_registrations(self) -> List[TourRegistrationModel]:
        return self.repo.latest_registrations()

    #commands
    def register(self, payload: TourRegistrationIn) -> TourRegistrationModel:
        attendees = payload.attendees

        if attendees < 1:
            raise FieldValidationError(
                {"adults_count": ["Please provide at least one attendee for the visit."]}
            )

        try:
            registration = self._register_with_retry(payload, attendees)
        except FieldValidationError as e:
            logger.warning(
                f"Tour registration rejected for {payload.preferred_date} "
                f"({payload.preferred_slot}), {attendees} visitors: {e}"
            )
            raise

        logger.info(
            f"Tour registration {registration.id} accepted: {attendees} visitors "
            f"on {registration.preferred_date} ({registration.preferred_slot})"
        )
        return registration

    @conflict_retry()
    def _register_with_retry(self, payload: TourRegistrationIn, attendees: int) -> TourRegistrationModel:
        try:
            registration = self._reserve_and_insert(payload, attendees)
            self.repo.commit()
            return registration
        except IntegrityError as e:
            # inny request wlasnie utworzyl ten sam slot
            self.repo.rollback()
            raise ConcurrencyConflict("Tour slot was created concurrently") from e
        except Exception:
            self.repo.rollback()
            raise

    def _reserve_and_insert(self, payload: TourRegistrationIn, attendees: int) -> TourRegistrationModel:
        capacity = slot_capacity(payload.preferred_slot)

        if capacity is not None:
            slot = self.repo.get_or_create_slot(payload.preferred_date, payload.preferred_slot)
            version = slot.version

            booked = self.repo.booked_count(payload.preferred_date, payload.preferred_slot)
            self.assert_capacity(remaining_capacity(capacity, booked), attendees)

            # update tour_slots set version = v + 1 where id = ? and version = v
            if self.repo.bump_slot(slot.id, version, attendees) == 0:
                logger.warning(
                    f"Slot {payload.preferred_slot} on {payload.preferred_date} changed "
                    f"while booking, retrying"
                )
                raise ConcurrencyConflict(
                    "The selected slot was booked by someone else at the same time. Please try again."
                )

        return self.repo.add_registration(
            TourRegistrationModel(**payload.model_dump(mode="python"))
        )

    @staticmethod
    def assert_capacity(remaining: int | None, attendees: int) -> None:
        if remaining is None:
            return

        if remaining == 0:
            raise FieldValidationError(
                {
                    "preferred_date": [
                        "The selected slot is fully booked for this date. "
                        "Please choose another day or time."
                    ]
                }
            )

        if attendees > remaining:
            raise FieldValidationError(
                {
                    "preferred_date": [
                        f"Only {remaining} spots remain for the selected slot. "
                        "Please adjust your group size or choose another date."
                    ]
                }
            )
