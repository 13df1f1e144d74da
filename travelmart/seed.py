import logging
import uuid

from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, ProgrammingError

from travelmart.db.session import SessionLocal
from travelmart.core.security import hash_password
from travelmart.models.user import User
from travelmart.models.service import Service
from travelmart.models.tour import Tour
from travelmart.models.vehicle import Vehicle
from travelmart.models.restaurant import Restaurant

logger = logging.getLogger(__name__)


def ensure_user(db: Session, email: str, password: str, role: str, name: str, phone: str = "") -> User:
    u = db.query(User).filter(User.email == email).first()
    if u:
        return u
    u = User(
        id=str(uuid.uuid4()),
        email=email,
        name=name,
        phone=phone,
        role=role,
        password_hash=hash_password(password),
        is_active=True,
    )
    db.add(u)
    db.commit()
    return u


def ensure_catalog(db: Session, provider: User) -> None:
    if db.query(Service).filter(Service.provider_id == provider.id).first():
        return
    db.add_all([
        Service(id=str(uuid.uuid4()), provider_id=provider.id, name="Pearl Continental Lahore", type="hotel",
                price=5000, location="Lahore", description="Deluxe rooms near Mall Road",
                attributes={"roomTypes": ["Standard", "Deluxe", "Suite"]}),
        Service(id=str(uuid.uuid4()), provider_id=provider.id, name="Hunza Valley Jeep Safari", type="vehicle",
                price=12000, location="Karimabad", attributes={"vehicleType": "Jeep", "seats": 6}),
        Service(id=str(uuid.uuid4()), provider_id=provider.id, name="Lok Virsa Folk Night", type="event",
                price=1500, location="Islamabad"),
        Tour(id=str(uuid.uuid4()), owner_id=provider.id, name="Naran Kaghan 3-day tour", price=18000,
             location="Naran", category="Adventure"),
        Vehicle(id=str(uuid.uuid4()), owner_id=provider.id, brand="Toyota", model="Corolla",
                vehicle_number="LEA-1234", vehicle_type="Car", price=6000, location="Lahore"),
        Restaurant(id=str(uuid.uuid4()), owner_id=provider.id, name="Monal Islamabad",
                   address="Pir Sohawa Road", table_count=30, price=500, status="approved"),
    ])
    db.commit()


def run(db=None):
    if db is None:
        db = SessionLocal()
    try:
        # If migrations haven't been applied yet, seeding must not crash the API.
        try:
            db.execute(text("SELECT 1 FROM users LIMIT 1"))
        except (ProgrammingError, OperationalError):
            db.rollback()
            logger.warning("users table not found yet; skipping seeding (run alembic upgrade head)")
            return

        ensure_user(db, "admin@travelmart.pk", "admin12345", "admin", "Admin")
        provider = ensure_user(db, "provider@travelmart.pk", "provider12345", "provider", "Demo Provider", "+923001234567")
        ensure_user(db, "customer@travelmart.pk", "customer12345", "customer", "Demo Customer", "+923007654321")
        ensure_catalog(db, provider)
        logger.info("seed complete")
    finally:
        db.close()


if __name__ == "__main__":
    from travelmart.core.logging import setup_logging
    setup_logging()
    run()
