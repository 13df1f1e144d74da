import uuid
from fastapi import APIRouter, Depends, HTTPException
from jose import JWTError
from sqlalchemy.orm import Session
from travelmart.db.session import get_db
from travelmart.schemas.auth import LoginRequest, RegisterRequest, RefreshRequest, TokenPair
from travelmart.models.user import User
from travelmart.core.security import (
    verify_password, hash_password, create_access_token, create_refresh_token, decode_token,
)
from travelmart.core.errors import ValidationError
from travelmart.api.deps import get_current_user

router = APIRouter(tags=["auth"])


def user_out(u: User) -> dict:
    return {"id": u.id, "email": u.email, "name": u.name, "phone": u.phone, "role": u.role}


@router.post("/auth/register")
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    email = body.email.strip().lower()
    if not email or "@" not in email:
        raise ValidationError("A valid email is required", fields=["email"])
    if len(body.password) < 8:
        raise ValidationError("Password must be at least 8 characters", fields=["password"])
    # providers are promoted through an approved provider request
    if body.role != "customer":
        raise ValidationError("Only customer accounts can be registered", fields=["role"])
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="email already registered")
    u = User(
        id=str(uuid.uuid4()),
        email=email,
        name=body.name.strip(),
        phone=body.phone.strip(),
        role=body.role,
        password_hash=hash_password(body.password),
        is_active=True,
    )
    db.add(u)
    db.commit()
    return {
        "success": True,
        "message": "Registered",
        "data": {
            "user": user_out(u),
            "access_token": create_access_token(u.id),
            "refresh_token": create_refresh_token(u.id),
        },
    }


@router.post("/auth/login", response_model=TokenPair)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == body.email.strip().lower()).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return TokenPair(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


@router.post("/auth/refresh", response_model=TokenPair)
def refresh(body: RefreshRequest, db: Session = Depends(get_db)):
    try:
        payload = decode_token(body.refreshToken, expected_type="refresh")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    user = db.get(User, payload.get("sub"))
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return TokenPair(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )

@router.get("/auth/me")
def me(me: User = Depends(get_current_user)):
    """Return current user info including role."""
    return {"success": True, "data": user_out(me)}
