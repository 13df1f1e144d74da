from sqlalchemy import String, Float, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from travelmart.db.session import Base

class VehicleReservation(Base):
    """Rental booked straight against a Vehicle listing. Carries no contact snapshot."""
    __tablename__ = "vehicle_reservations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    vehicle_id: Mapped[str] = mapped_column(String(36), index=True)
    vehicle_owner_id: Mapped[str] = mapped_column(String(36), index=True)
    vehicle_number: Mapped[str] = mapped_column(String(40), default="")
    location: Mapped[str] = mapped_column(String(200), default="")

    pickup_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    return_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    daily_rate: Mapped[float] = mapped_column(Float)
    need_driver: Mapped[bool] = mapped_column(Boolean, default=False)
    price: Mapped[float] = mapped_column(Float)  # total for the whole rental
    transaction_id: Mapped[str] = mapped_column(String(36))

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
    confirmation_number: Mapped[str] = mapped_column(String(40), nullable=True)
    rejection_reason: Mapped[str] = mapped_column(String(500), nullable=True)
    response_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
