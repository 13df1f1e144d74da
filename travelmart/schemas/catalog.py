from typing import Optional
from pydantic import BaseModel, Field

class ServiceCreate(BaseModel):
    name: str
    type: str  # hotel, vehicle, tour, restaurant, event
    price: float = Field(ge=0)
    description: str = ""
    location: str = ""
    attributes: dict = {}

class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    status: Optional[str] = None  # active, inactive
    location: Optional[str] = None
    attributes: Optional[dict] = None

class TourCreate(BaseModel):
    name: str
    price: float = Field(ge=0)
    location: str = ""
    category: str = ""

class VehicleCreate(BaseModel):
    brand: str
    model: str
    price: float = Field(ge=0)  # per day
    vehicleNumber: str = ""
    vehicleType: str = ""
    location: str = ""

class RestaurantCreate(BaseModel):
    name: str
    address: str = ""
    tableCount: int = Field(default=1, ge=1)
    price: float = Field(default=0, ge=0)

class RestaurantDecision(BaseModel):
    approved: bool = True
