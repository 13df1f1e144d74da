from datetime import datetime
from typing import Optional
from pydantic import BaseModel

# Fields are optional at the schema level so the service layer can report
# every missing field in one validation message.

class ServiceReservationCreate(BaseModel):
    serviceId: Optional[str] = None
    checkInDate: Optional[datetime] = None
    checkOutDate: Optional[datetime] = None
    customerName: Optional[str] = None
    customerEmail: Optional[str] = None
    customerPhone: Optional[str] = None
    cnicNumber: Optional[str] = None
    cnicPhoto: Optional[str] = None  # reference to an already uploaded document
    guests: Optional[int] = None
    rooms: Optional[int] = None
    roomType: Optional[str] = None
    groupSize: Optional[int] = None
    vehicleType: Optional[str] = None
    eventType: Optional[str] = None
    specialRequests: Optional[str] = ""

class TourReservationCreate(BaseModel):
    tourDate: Optional[datetime] = None
    guests: Optional[int] = 1
    customerName: Optional[str] = None
    customerEmail: Optional[str] = None
    customerPhone: Optional[str] = None
    specialRequests: Optional[str] = ""

class VehicleReservationCreate(BaseModel):
    pickupDate: Optional[datetime] = None
    returnDate: Optional[datetime] = None
    needDriver: bool = False
    location: Optional[str] = None

class RestaurantReservationCreate(BaseModel):
    reservationDate: Optional[datetime] = None
    guests: Optional[int] = 1
    tableNumber: Optional[int] = None
    customerName: Optional[str] = None
    customerEmail: Optional[str] = None
    customerPhone: Optional[str] = None
    specialRequests: Optional[str] = ""

class StatusUpdate(BaseModel):
    status: Optional[str] = None
    rejectionReason: Optional[str] = None
