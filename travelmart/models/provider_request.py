from sqlalchemy import String, DateTime, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from travelmart.db.session import Base

REQUEST_STATUSES = ("pending", "approved", "rejected")

class ProviderRequest(Base):
    """A user's application to list services of one type; an admin approves or rejects it."""
    __tablename__ = "provider_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    provider_type: Mapped[str] = mapped_column(String(20), index=True)  # hotel, vehicle, tour, restaurant, event

    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    business_name: Mapped[str] = mapped_column(String(200))
    business_phone: Mapped[str] = mapped_column(String(40))
    business_email: Mapped[str] = mapped_column(String(320), default="")
    business_address: Mapped[str] = mapped_column(String(300), default="")

    # fleet size, rooms, cuisine, specializations, ...
    details: Mapped[dict] = mapped_column(JSON, default=dict)
    documents: Mapped[dict] = mapped_column(JSON, default=dict)  # references to uploaded CNIC/licence copies
    additional_info: Mapped[str] = mapped_column(Text, default="")

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)  # pending, approved, rejected
    rejection_reason: Mapped[str] = mapped_column(String(500), nullable=True)
    reviewed_by: Mapped[str] = mapped_column(String(36), nullable=True)
    reviewed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
