import os
import uuid

# Settings are read at import time; point them at an in-memory database first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["NOTIFY_ADMINS_ON_BOOKING"] = "true"

import pytest
from fastapi.testclient import TestClient

import travelmart.models  # noqa: F401
from travelmart.db.session import Base, SessionLocal, engine
from travelmart.main import app
from travelmart.models.service import Service
from travelmart.models.tour import Tour
from travelmart.models.vehicle import Vehicle
from travelmart.models.restaurant import Restaurant

from helpers import auth, hotel_booking_body, make_user


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin(db):
    return make_user(db, "admin", "admin@example.com", "Site Admin")


@pytest.fixture
def provider(db):
    return make_user(db, "provider", "provider@example.com", "Hotel Owner")


@pytest.fixture
def other_provider(db):
    return make_user(db, "provider", "other@example.com", "Rival Owner")


@pytest.fixture
def customer(db):
    return make_user(db, "customer", "ali@example.com", "Ali Khan", "+923001112223")


@pytest.fixture
def hotel(db, provider):
    s = Service(id=str(uuid.uuid4()), provider_id=provider.id, name="Serena Hotel", type="hotel",
                price=5000, status="active", location="Islamabad", attributes={})
    db.add(s)
    db.commit()
    return s


@pytest.fixture
def tour(db, provider):
    t = Tour(id=str(uuid.uuid4()), owner_id=provider.id, name="Swat Valley Tour", price=8000)
    db.add(t)
    db.commit()
    return t


@pytest.fixture
def vehicle(db, provider):
    v = Vehicle(id=str(uuid.uuid4()), owner_id=provider.id, brand="Toyota", model="Prado",
                vehicle_number="ISB-777", vehicle_type="SUV", price=10000, location="Islamabad")
    db.add(v)
    db.commit()
    return v


@pytest.fixture
def restaurant(db, provider):
    r = Restaurant(id=str(uuid.uuid4()), owner_id=provider.id, name="Monal", table_count=10,
                   price=500, status="approved")
    db.add(r)
    db.commit()
    return r


@pytest.fixture
def book_hotel(client, customer, hotel):
    """Create a pending hotel reservation through the API and return its id."""
    def _book(**overrides):
        resp = client.post("/api/v1/reservations", json=hotel_booking_body(hotel.id, **overrides),
                           headers=auth(customer))
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]["id"]
    return _book
