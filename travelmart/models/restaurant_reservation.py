from sqlalchemy import String, Integer, Float, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from travelmart.db.session import Base

class RestaurantReservation(Base):
    __tablename__ = "restaurant_reservations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    restaurant_id: Mapped[str] = mapped_column(String(36), index=True)
    restaurant_owner_id: Mapped[str] = mapped_column(String(36), index=True)

    reservation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    guests: Mapped[int] = mapped_column(Integer, default=1)
    table_number: Mapped[int] = mapped_column(Integer, nullable=True)

    customer_name: Mapped[str] = mapped_column(String(200))
    customer_email: Mapped[str] = mapped_column(String(320))
    customer_phone: Mapped[str] = mapped_column(String(40))
    special_requests: Mapped[str] = mapped_column(Text, default="")

    price_per_guest: Mapped[float] = mapped_column(Float, default=0)
    total_amount: Mapped[float] = mapped_column(Float, default=0)

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
    confirmation_number: Mapped[str] = mapped_column(String(40), nullable=True)
    rejection_reason: Mapped[str] = mapped_column(String(500), nullable=True)
    response_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
