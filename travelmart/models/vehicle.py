from sqlalchemy import String, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from travelmart.db.session import Base

class Vehicle(Base):
    __tablename__ = "vehicles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(36), index=True)
    brand: Mapped[str] = mapped_column(String(80))
    model: Mapped[str] = mapped_column(String(80))
    vehicle_number: Mapped[str] = mapped_column(String(40), default="")
    vehicle_type: Mapped[str] = mapped_column(String(40), default="")  # Car, SUV, Van, ...
    price: Mapped[float] = mapped_column(Float, default=0)  # per day
    location: Mapped[str] = mapped_column(String(200), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}".strip()
