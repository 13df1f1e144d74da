import logging
import uuid

from sqlalchemy.orm import Session

from travelmart.core.config import settings
from travelmart.core.dates import as_utc, utcnow
from travelmart.core.errors import AuthorizationError, NotFoundError, ValidationError, missing_fields_error
from travelmart.models.user import User
from travelmart.models.service import Service
from travelmart.models.tour import Tour
from travelmart.models.vehicle import Vehicle
from travelmart.models.restaurant import Restaurant
from travelmart.models.service_reservation import ServiceReservation
from travelmart.models.tour_reservation import TourReservation
from travelmart.models.vehicle_reservation import VehicleReservation
from travelmart.models.restaurant_reservation import RestaurantReservation
from travelmart.services.audit_service import log_audit
from travelmart.services.notification_service import notify, notify_admins
from travelmart.services.pricing import compute_total, number_of_days, party_quantity, single_day_total, validate_stay
from travelmart.services.reservation_stores import get_store

logger = logging.getLogger(__name__)

SERVICE_REQUIRED = (
    "serviceId", "checkInDate", "checkOutDate",
    "customerName", "customerEmail", "customerPhone", "cnicNumber",
)
TOUR_REQUIRED = ("tourDate", "customerName", "customerEmail", "customerPhone")
VEHICLE_REQUIRED = ("pickupDate", "returnDate")
RESTAURANT_REQUIRED = ("reservationDate", "customerName", "customerEmail", "customerPhone")


def _require(body, fields) -> None:
    missing = []
    for f in fields:
        v = getattr(body, f, None)
        if v is None or (isinstance(v, str) and not v.strip()):
            missing.append(f)
    if missing:
        raise missing_fields_error(missing)


def _money(amount: float) -> str:
    return f"{settings.CURRENCY_LABEL} {amount:,.0f}"


def create_service_reservation(db: Session, customer: User, body) -> tuple[ServiceReservation, Service]:
    _require(body, SERVICE_REQUIRED)
    check_in, check_out = as_utc(body.checkInDate), as_utc(body.checkOutDate)
    validate_stay(check_in, check_out)

    service = db.get(Service, body.serviceId)
    if not service or service.status != "active":
        raise NotFoundError("Service not found or not available")

    quantity = party_quantity(body.rooms, body.guests, body.groupSize)
    total = compute_total(service.price, check_in, check_out, quantity)

    r = ServiceReservation(
        id=str(uuid.uuid4()),
        customer_id=customer.id,
        service_id=service.id,
        provider_id=service.provider_id,
        check_in_date=check_in,
        check_out_date=check_out,
        guests=body.guests or 1,
        rooms=body.rooms,
        room_type=body.roomType,
        group_size=body.groupSize,
        vehicle_type=body.vehicleType,
        event_type=body.eventType,
        special_requests=body.specialRequests or "",
        customer_name=body.customerName.strip(),
        customer_email=body.customerEmail.strip().lower(),
        customer_phone=body.customerPhone.strip(),
        cnic_number=body.cnicNumber.strip(),
        cnic_photo=body.cnicPhoto or "",
        price_per_unit=float(service.price),
        total_amount=total,
        status="pending",
        payment_status="pending",
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    logger.info("service reservation %s created for service %s (total %s)", r.id, service.id, total)

    data = {
        "reservationId": r.id,
        "reservationType": "service",
        "serviceName": service.name,
        "customerName": r.customer_name,
        "checkInDate": check_in.date().isoformat(),
        "totalAmount": total,
    }
    notify(
        db, service.provider_id, "New Service Booking",
        f"You have a new booking request for {service.name} from {r.customer_name}. "
        f"Check-in: {check_in.date().isoformat()}. Total: {_money(total)}",
        "new_service_booking", data,
    )
    if settings.NOTIFY_ADMINS_ON_BOOKING:
        provider = db.get(User, service.provider_id)
        provider_name = (provider.name or provider.email) if provider else service.provider_id
        notify_admins(
            db, "New Service Booking (Admin)",
            f"New booking for {service.name} by {r.customer_name}. Provider: {provider_name}. Amount: {_money(total)}",
            "new_service_booking", {**data, "providerId": service.provider_id},
        )
    return r, service


def create_tour_reservation(db: Session, customer: User, tour_id: str, body) -> tuple[TourReservation, Tour]:
    _require(body, TOUR_REQUIRED)
    tour = db.get(Tour, tour_id)
    if not tour:
        raise NotFoundError("Tour not found")

    guests = party_quantity(guests=body.guests)
    total = single_day_total(tour.price, guests)
    r = TourReservation(
        id=str(uuid.uuid4()),
        customer_id=customer.id,
        tour_id=tour.id,
        tour_owner_id=tour.owner_id,
        customer_name=body.customerName.strip(),
        customer_email=body.customerEmail.strip().lower(),
        customer_phone=body.customerPhone.strip(),
        tour_name=tour.name,
        tour_date=as_utc(body.tourDate),
        guests=guests,
        tour_price=float(tour.price),
        total_amount=total,
        special_requests=body.specialRequests or "",
        status="pending",
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    logger.info("tour reservation %s created for tour %s", r.id, tour.id)

    notify(
        db, tour.owner_id, "New Tour Booking",
        f"{r.customer_name} booked {tour.name} for {guests} guest(s) on {r.tour_date.date().isoformat()}. "
        f"Total: {_money(total)}",
        "new_reservation",
        {"reservationId": r.id, "reservationType": "tour", "serviceName": tour.name, "totalAmount": total},
    )
    return r, tour


def create_vehicle_reservation(db: Session, customer: User, vehicle_id: str, body) -> tuple[VehicleReservation, Vehicle]:
    _require(body, VEHICLE_REQUIRED)
    pickup, ret = as_utc(body.pickupDate), as_utc(body.returnDate)
    validate_stay(pickup, ret)

    vehicle = db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise NotFoundError("Vehicle not found")

    days = number_of_days(pickup, ret)
    total = compute_total(vehicle.price, pickup, ret)
    if body.needDriver:
        total += settings.DRIVER_FEE_PER_DAY * days

    r = VehicleReservation(
        id=str(uuid.uuid4()),
        user_id=customer.id,
        vehicle_id=vehicle.id,
        vehicle_owner_id=vehicle.owner_id,
        vehicle_number=vehicle.vehicle_number,
        location=body.location or vehicle.location,
        pickup_date=pickup,
        return_date=ret,
        daily_rate=float(vehicle.price),
        need_driver=body.needDriver,
        price=total,
        transaction_id=str(uuid.uuid4()),
        status="pending",
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    logger.info("vehicle reservation %s created for vehicle %s (%s day(s))", r.id, vehicle.id, days)

    notify(
        db, vehicle.owner_id, "New Vehicle Booking",
        f"{customer.name or customer.email} requested {vehicle.display_name} for {days} day(s) "
        f"from {pickup.date().isoformat()}. Total: {_money(total)}",
        "new_reservation",
        {"reservationId": r.id, "reservationType": "vehicle", "serviceName": vehicle.display_name, "totalAmount": total},
    )
    return r, vehicle


def create_restaurant_reservation(db: Session, customer: User, restaurant_id: str, body) -> tuple[RestaurantReservation, Restaurant]:
    _require(body, RESTAURANT_REQUIRED)
    restaurant = db.get(Restaurant, restaurant_id)
    if not restaurant or restaurant.status != "approved":
        raise NotFoundError("Restaurant not found or not accepting reservations")
    if body.tableNumber is not None and not 1 <= body.tableNumber <= restaurant.table_count:
        raise ValidationError(f"Table number must be between 1 and {restaurant.table_count}", fields=["tableNumber"])

    guests = party_quantity(guests=body.guests)
    total = single_day_total(restaurant.price, guests)
    r = RestaurantReservation(
        id=str(uuid.uuid4()),
        user_id=customer.id,
        restaurant_id=restaurant.id,
        restaurant_owner_id=restaurant.owner_id,
        reservation_date=as_utc(body.reservationDate),
        guests=guests,
        table_number=body.tableNumber,
        customer_name=body.customerName.strip(),
        customer_email=body.customerEmail.strip().lower(),
        customer_phone=body.customerPhone.strip(),
        special_requests=body.specialRequests or "",
        price_per_guest=float(restaurant.price),
        total_amount=total,
        status="pending",
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    logger.info("restaurant reservation %s created for restaurant %s", r.id, restaurant.id)

    notify(
        db, restaurant.owner_id, "New Table Booking",
        f"{r.customer_name} booked a table for {guests} at {restaurant.name} on {r.reservation_date.date().isoformat()}.",
        "new_reservation",
        {"reservationId": r.id, "reservationType": "restaurant", "serviceName": restaurant.name},
    )
    return r, restaurant


def get_reservation_details(db: Session, kind: str, reservation_id: str, actor: User) -> dict:
    store = get_store(kind)
    r = store.get(db, reservation_id)
    if not r:
        raise NotFoundError("Reservation not found")
    if not (actor.role == "admin" or store.is_customer(r, actor) or store.is_provider(r, actor)):
        raise AuthorizationError("You are not allowed to view this reservation")
    customer = db.get(User, store.customer_id(r)) if store.joins_customer else None
    return store.normalize(r, store.get_item(db, r), customer)


def delete_reservation(db: Session, kind: str, reservation_id: str, customer: User) -> None:
    """Customers may remove a booking from their history once it is over."""
    store = get_store(kind)
    r = store.get(db, reservation_id)
    if not r or not store.is_customer(r, customer):
        raise NotFoundError("Reservation not found")

    end = store.end_date(r)
    is_past = end is not None and end < utcnow()
    if r.status not in ("cancelled", "completed") and not is_past:
        raise ValidationError("You can only delete cancelled, completed, or past reservations", fields=["status"])

    item = store.get_item(db, r)
    name = store.item_name(item, r) or "your reservation"
    log_audit(db, actor_user_id=customer.id, action="reservation_deleted", entity_type=store.entity_type,
              entity_id=r.id, details={"status": r.status, "confirmationNumber": r.confirmation_number})
    db.delete(r)
    db.commit()
    logger.info("%s %s deleted by customer %s", store.entity_type, reservation_id, customer.id)

    notify(
        db, customer.id, "Booking Deleted",
        f"Your booking for {name} has been permanently deleted from your booking history.",
        "booking_deleted",
        {"reservationId": reservation_id, "reservationType": store.kind, "serviceName": name,
         "deletedAt": utcnow().isoformat()},
    )
