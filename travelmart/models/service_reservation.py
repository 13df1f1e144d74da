from sqlalchemy import String, Integer, Float, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from travelmart.db.session import Base

RESERVATION_STATUSES = ("pending", "confirmed", "cancelled", "completed")

class ServiceReservation(Base):
    """Booking against a unified catalog Service (hotel, vehicle, restaurant, event, tour)."""
    __tablename__ = "service_reservations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(36), index=True)
    service_id: Mapped[str] = mapped_column(String(36), index=True)
    provider_id: Mapped[str] = mapped_column(String(36), index=True)  # copied from the service for cheap provider queries

    check_in_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    check_out_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    guests: Mapped[int] = mapped_column(Integer, default=1)

    # contact snapshot taken at booking time; never re-read from the profile
    customer_name: Mapped[str] = mapped_column(String(200))
    customer_email: Mapped[str] = mapped_column(String(320))
    customer_phone: Mapped[str] = mapped_column(String(40))
    cnic_number: Mapped[str] = mapped_column(String(20), default="")
    cnic_photo: Mapped[str] = mapped_column(String(512), default="")

    # type-specific details
    rooms: Mapped[int] = mapped_column(Integer, nullable=True)
    room_type: Mapped[str] = mapped_column(String(80), nullable=True)
    group_size: Mapped[int] = mapped_column(Integer, nullable=True)
    vehicle_type: Mapped[str] = mapped_column(String(80), nullable=True)
    event_type: Mapped[str] = mapped_column(String(80), nullable=True)
    special_requests: Mapped[str] = mapped_column(Text, default="")

    price_per_unit: Mapped[float] = mapped_column(Float)
    total_amount: Mapped[float] = mapped_column(Float)

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)  # pending, confirmed, cancelled, completed
    confirmation_number: Mapped[str] = mapped_column(String(40), unique=True, nullable=True)
    rejection_reason: Mapped[str] = mapped_column(String(500), nullable=True)
    response_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    payment_status: Mapped[str] = mapped_column(String(20), default="pending")  # pending, paid, refunded, failed

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
