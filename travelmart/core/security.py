from datetime import timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from travelmart.core.config import settings
from travelmart.core.dates import utcnow

# PBKDF2 avoids bcrypt backend/version issues and the 72-byte bcrypt input limit.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
ALGO = "HS256"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def _encode(subject: str, token_type: str, expires: timedelta) -> str:
    payload = {"sub": subject, "type": token_type, "exp": utcnow() + expires}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGO)


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return _encode(subject, "access", timedelta(minutes=expires_minutes))


def create_refresh_token(subject: str, expires_days: int | None = None) -> str:
    if expires_days is None:
        expires_days = settings.REFRESH_TOKEN_EXPIRE_DAYS
    return _encode(subject, "refresh", timedelta(days=expires_days))


def decode_token(token: str, expected_type: str = "access") -> dict:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGO])
    if payload.get("type") != expected_type:
        raise JWTError(f"expected a {expected_type} token")
    return payload
