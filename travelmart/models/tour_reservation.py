from sqlalchemy import String, Integer, Float, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from travelmart.db.session import Base

class TourReservation(Base):
    __tablename__ = "tour_reservations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(36), index=True)
    tour_id: Mapped[str] = mapped_column(String(36), index=True)
    tour_owner_id: Mapped[str] = mapped_column(String(320), index=True)  # older rows hold the owner's email

    customer_name: Mapped[str] = mapped_column(String(200))
    customer_email: Mapped[str] = mapped_column(String(320), index=True)
    customer_phone: Mapped[str] = mapped_column(String(40))

    tour_name: Mapped[str] = mapped_column(String(200))
    tour_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    guests: Mapped[int] = mapped_column(Integer, default=1)
    tour_price: Mapped[float] = mapped_column(Float)
    total_amount: Mapped[float] = mapped_column(Float)
    special_requests: Mapped[str] = mapped_column(Text, default="")

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
    confirmation_number: Mapped[str] = mapped_column(String(40), nullable=True)
    rejection_reason: Mapped[str] = mapped_column(String(500), nullable=True)
    response_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
