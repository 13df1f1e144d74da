from sqlalchemy import String, Float, DateTime, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from travelmart.db.session import Base

SERVICE_TYPES = ("hotel", "vehicle", "tour", "restaurant", "event")

class Service(Base):
    """Unified catalog listing; one provider owns it, customers book it while active."""
    __tablename__ = "services"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    provider_id: Mapped[str] = mapped_column(String(36), index=True)

    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[str] = mapped_column(String(20), index=True)  # hotel, vehicle, tour, restaurant, event
    price: Mapped[float] = mapped_column(Float, default=0)  # per night / day / unit depending on type
    status: Mapped[str] = mapped_column(String(20), default="active")  # active, inactive
    location: Mapped[str] = mapped_column(String(200), default="")

    # room types for hotels, vehicle specs for vehicles, etc.
    attributes: Mapped[dict] = mapped_column(JSON, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
