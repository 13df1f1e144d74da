from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "Travelmart API"
    # Comma-separated origins for CORS (e.g. https://travelmart.pk,https://admin.travelmart.pk). If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    DATABASE_URL: str

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Render and others give postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v
    REDIS_URL: str = "redis://localhost:6379/0"

    # Reservations
    CURRENCY_LABEL: str = "Rs."
    NOTIFY_ADMINS_ON_BOOKING: bool = True
    DRIVER_FEE_PER_DAY: float = 3000.0  # added per rental day when a vehicle is booked with a driver

    # Listing pagination
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    # Celery beat: how often confirmed reservations past their end date are marked completed
    COMPLETE_SWEEP_SECONDS: float = 3600.0


settings = Settings()
