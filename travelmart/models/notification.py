from sqlalchemy import String, Boolean, DateTime, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from travelmart.db.session import Base

NOTIFICATION_TYPES = (
    "provider_request_submitted",
    "provider_request_approved",
    "provider_request_rejected",
    "new_reservation",
    "reservation_approved",
    "reservation_rejected",
    "reservation_cancelled",
    "service_added",
    "service_updated",
    "payment_confirmed",
    "system_maintenance",
    "new_service_booking",
    "booking_confirmed",
    "booking_cancelled",
    "booking_updated",
    "booking_deleted",
)

class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True)  # recipient
    title: Mapped[str] = mapped_column(String(200))
    message: Mapped[str] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(40), index=True)
    read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=True)  # deep-link payload for the client
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
