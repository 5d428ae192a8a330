import os

# baza w pamieci dla testow, ustawione przed importem pakietu
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import museum.data.models  # noqa: E402,F401
from museum.data.database import Base, SessionLocal, engine  # noqa: E402
from museum.domain.schemas import CheckoutIn, TourRegistrationIn  # noqa: E402
from museum.domain.slots import MORNING  # noqa: E402
from museum.main import create_app  # noqa: E402
from museum.services.catalog_service import CatalogService  # noqa: E402


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    return TestClient(create_app())


@pytest.fixture()
def make_product(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "sku": f"VY-T{counter['n']:03d}",
            "name": f"Test Textile {counter['n']}",
            "price": "150.00",
            "inventory_count": 10,
        }
        data.update(overrides)
        images = data.pop("images", ())
        product = CatalogService(db).create_product(data, image_urls=images)
        db.commit()
        return product

    return _make


@pytest.fixture()
def checkout_payload():
    def _payload(**overrides):
        data = {
            "customer_name": "Asha Mehta",
            "email": "asha@example.com",
            "phone": "9876543210",
            "country_code": "91",
            "address_line1": "12 Law Garden Road",
            "city": "Ahmedabad",
            "postal_code": "380006",
        }
        data.update(overrides)
        return CheckoutIn(**data)

    return _payload


@pytest.fixture()
def registration_payload():
    def _payload(**overrides):
        data = {
            "contact_name": "Ravi Patel",
            "email": "ravi@example.com",
            "group_type": "school",
            "preferred_date": date.today() + timedelta(days=7),
            "preferred_slot": MORNING,
            "adults_count": 2,
            "students_count": 0,
        }
        data.update(overrides)
        return TourRegistrationIn(**data)

    return _payload
