import uuid

from travelmart.core.security import create_access_token, hash_password
from travelmart.models.user import User

CHECK_IN = "2030-01-10T14:00:00+00:00"
CHECK_OUT = "2030-01-12T12:00:00+00:00"


def make_user(db, role: str, email: str | None = None, name: str = "", phone: str = "") -> User:
    u = User(
        id=str(uuid.uuid4()),
        email=email or f"{role}-{uuid.uuid4().hex[:8]}@example.com",
        name=name or role.title(),
        phone=phone,
        role=role,
        password_hash=hash_password("password123"),
        is_active=True,
    )
    db.add(u)
    db.commit()
    return u


def auth(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def hotel_booking_body(service_id: str, **overrides) -> dict:
    body = {
        "serviceId": service_id,
        "checkInDate": CHECK_IN,
        "checkOutDate": CHECK_OUT,
        "customerName": "Ali Khan",
        "customerEmail": "ali@example.com",
        "customerPhone": "+923001112223",
        "cnicNumber": "35202-1234567-1",
        "rooms": 1,
        "guests": 2,
    }
    body.update(overrides)
    return body
