"""Adapters over the four reservation tables.

Each store knows its model, the catalog item it points at, who owns it, and
how to turn one of its rows into the unified reservation record used by the
listings. Status handling, deletion and listing are written once against
this interface.
"""
from sqlalchemy.orm import Session

from travelmart.core.dates import as_utc, iso
from travelmart.core.errors import ValidationError
from travelmart.models.user import User
from travelmart.models.service import Service
from travelmart.models.tour import Tour
from travelmart.models.vehicle import Vehicle
from travelmart.models.restaurant import Restaurant
from travelmart.models.service_reservation import ServiceReservation
from travelmart.models.tour_reservation import TourReservation
from travelmart.models.vehicle_reservation import VehicleReservation
from travelmart.models.restaurant_reservation import RestaurantReservation
from travelmart.services.pricing import number_of_days

TYPE_LABELS = {
    "hotel": "Hotel Reservation",
    "vehicle": "Vehicle Rental",
    "restaurant": "Restaurant Booking",
    "tour": "Tour Booking",
    "event": "Event Booking",
}
DEFAULT_LABEL = "Service Reservation"


def format_details(service_type: str, guests: int | None = None, rooms: int | None = None,
                   room_type: str | None = None, days: int | None = None, vehicle: str | None = None,
                   table: int | None = None, group_size: int | None = None,
                   event_type: str | None = None) -> tuple[str, str]:
    """Return (serviceTypeLabel, formattedDetails) for one reservation."""
    guests = guests or 1
    if service_type == "hotel":
        details = f"Guests: {guests}, Rooms: {rooms or 1}"
        if room_type:
            details += f", Type: {room_type}"
    elif service_type == "vehicle":
        details = f"Duration: {days or 1} day(s)"
        if vehicle:
            details += f", Vehicle: {vehicle}"
    elif service_type == "restaurant":
        details = f"Guests: {guests}"
        if table:
            details += f", Table: {table}"
    elif service_type == "tour":
        details = f"Group Size: {group_size or guests}"
    elif service_type == "event":
        details = f"Guests: {guests}"
        if event_type:
            details += f", Event: {event_type}"
    else:
        details = f"Guests: {guests}"
        if rooms:
            details += f", Units: {rooms}"
    return TYPE_LABELS.get(service_type, DEFAULT_LABEL), details


class ReservationStore:
    kind: str
    model: type
    item_model: type
    item_key: str
    owner_key: str
    customer_key: str
    start_key: str
    end_key: str
    total_key: str = "total_amount"
    prefix: str = "TR"
    # legacy rows carry no contact snapshot and must be joined with users
    joins_customer: bool = False

    @property
    def entity_type(self) -> str:
        return f"{self.kind}_reservation"

    def get(self, db: Session, reservation_id: str, for_update: bool = False):
        q = db.query(self.model).filter(self.model.id == reservation_id)
        if for_update:
            q = q.with_for_update()
        return q.first()

    def get_item(self, db: Session, row):
        item_id = getattr(row, self.item_key)
        return db.get(self.item_model, item_id) if item_id else None

    def owner_id(self, row) -> str:
        return getattr(row, self.owner_key)

    def customer_id(self, row) -> str:
        return getattr(row, self.customer_key)

    def start_date(self, row):
        return as_utc(getattr(row, self.start_key))

    def end_date(self, row):
        return as_utc(getattr(row, self.end_key))

    def total(self, row) -> float:
        return float(getattr(row, self.total_key) or 0)

    def item_name(self, item, row) -> str:
        return getattr(item, "name", "") if item else ""

    # ---- ownership ----
    def is_customer(self, row, user: User) -> bool:
        return self.customer_id(row) == user.id

    def is_provider(self, row, user: User) -> bool:
        return self.owner_id(row) == user.id

    def customer_filter(self, user: User):
        return getattr(self.model, self.customer_key) == user.id

    def provider_filter(self, user: User):
        return getattr(self.model, self.owner_key) == user.id

    # ---- normalisation ----
    def contact(self, row, customer: User | None) -> dict:
        return {
            "customerName": row.customer_name,
            "customerEmail": row.customer_email,
            "customerPhone": row.customer_phone,
        }

    def details(self, row, item) -> dict:
        raise NotImplementedError

    def normalize(self, row, item, customer: User | None = None) -> dict:
        d = self.details(row, item)
        service_type = d.pop("serviceType")
        label, formatted = format_details(service_type, **d.pop("format"))
        out = {
            "id": row.id,
            "type": self.kind,
            "serviceType": service_type,
            "serviceId": getattr(row, self.item_key),
            "serviceName": self.item_name(item, row),
            "customerId": self.customer_id(row),
            **self.contact(row, customer),
            "checkInDate": iso(self.start_date(row)),
            "checkOutDate": iso(self.end_date(row)),
            "status": row.status,
            "totalAmount": self.total(row),
            "confirmationNumber": row.confirmation_number,
            "rejectionReason": row.rejection_reason,
            "responseDate": iso(as_utc(row.response_date)),
            "createdAt": iso(as_utc(row.created_at)),
            "serviceTypeLabel": label,
            "formattedDetails": formatted,
            "displayDetails": f"{label} - {formatted}",
        }
        out.update(d)
        return out


class ServiceStore(ReservationStore):
    kind = "service"
    model = ServiceReservation
    item_model = Service
    item_key = "service_id"
    owner_key = "provider_id"
    customer_key = "customer_id"
    start_key = "check_in_date"
    end_key = "check_out_date"

    def details(self, row, item) -> dict:
        service_type = item.type if item else "service"
        return {
            "serviceType": service_type,
            "guests": row.guests,
            "rooms": row.rooms,
            "roomType": row.room_type,
            "groupSize": row.group_size,
            "vehicleType": row.vehicle_type,
            "eventType": row.event_type,
            "pricePerUnit": row.price_per_unit,
            "specialRequests": row.special_requests or "",
            "paymentStatus": row.payment_status,
            "format": {
                "guests": row.guests,
                "rooms": row.rooms,
                "room_type": row.room_type,
                "days": number_of_days(row.check_in_date, row.check_out_date),
                "vehicle": row.vehicle_type,
                "table": row.rooms,
                "group_size": row.group_size,
                "event_type": row.event_type,
            },
        }


class TourStore(ReservationStore):
    kind = "tour"
    model = TourReservation
    item_model = Tour
    item_key = "tour_id"
    owner_key = "tour_owner_id"
    customer_key = "customer_id"
    start_key = "tour_date"
    end_key = "tour_date"

    def item_name(self, item, row) -> str:
        return item.name if item else row.tour_name

    # Older bookings stored the account email in the id columns. The contact
    # email is typed in by the customer and never decides ownership.
    def is_customer(self, row, user: User) -> bool:
        return row.customer_id in (user.id, user.email)

    def is_provider(self, row, user: User) -> bool:
        return row.tour_owner_id in (user.id, user.email)

    def customer_filter(self, user: User):
        return TourReservation.customer_id.in_([user.id, user.email])

    def provider_filter(self, user: User):
        return TourReservation.tour_owner_id.in_([user.id, user.email])

    def details(self, row, item) -> dict:
        return {
            "serviceType": "tour",
            "guests": row.guests,
            "pricePerUnit": row.tour_price,
            "specialRequests": row.special_requests or "",
            "format": {"guests": row.guests, "group_size": row.guests},
        }


class VehicleStore(ReservationStore):
    kind = "vehicle"
    model = VehicleReservation
    item_model = Vehicle
    item_key = "vehicle_id"
    owner_key = "vehicle_owner_id"
    customer_key = "user_id"
    start_key = "pickup_date"
    end_key = "return_date"
    total_key = "price"
    prefix = "VH"
    joins_customer = True

    def item_name(self, item, row) -> str:
        return item.display_name if item else ""

    def contact(self, row, customer: User | None) -> dict:
        return {
            "customerName": customer.name if customer else "",
            "customerEmail": customer.email if customer else "",
            "customerPhone": customer.phone if customer else "",
        }

    def details(self, row, item) -> dict:
        vehicle = (item.vehicle_type or item.display_name) if item else None
        return {
            "serviceType": "vehicle",
            "guests": 1,
            "pricePerUnit": row.daily_rate,
            "specialRequests": "",
            "needDriver": row.need_driver,
            "vehicleNumber": row.vehicle_number,
            "location": row.location,
            "format": {"days": number_of_days(row.pickup_date, row.return_date), "vehicle": vehicle},
        }


class RestaurantStore(ReservationStore):
    kind = "restaurant"
    model = RestaurantReservation
    item_model = Restaurant
    item_key = "restaurant_id"
    owner_key = "restaurant_owner_id"
    customer_key = "user_id"
    start_key = "reservation_date"
    end_key = "reservation_date"
    prefix = "RS"

    def details(self, row, item) -> dict:
        return {
            "serviceType": "restaurant",
            "guests": row.guests,
            "tableNumber": row.table_number,
            "pricePerUnit": row.price_per_guest,
            "specialRequests": row.special_requests or "",
            "format": {"guests": row.guests, "table": row.table_number},
        }


STORES: dict[str, ReservationStore] = {
    s.kind: s for s in (ServiceStore(), TourStore(), VehicleStore(), RestaurantStore())
}


def get_store(kind: str) -> ReservationStore:
    store = STORES.get(kind)
    if store is None:
        raise ValidationError(f"Unknown reservation type: {kind}", fields=["type"])
    return store
