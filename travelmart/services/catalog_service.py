import logging
import uuid

from sqlalchemy.orm import Session

from travelmart.core.dates import as_utc, iso
from travelmart.core.errors import NotFoundError, ValidationError
from travelmart.models.user import User
from travelmart.models.service import Service, SERVICE_TYPES
from travelmart.models.tour import Tour
from travelmart.models.vehicle import Vehicle
from travelmart.models.restaurant import Restaurant
from travelmart.services.audit_service import log_audit
from travelmart.services.notification_service import notify

logger = logging.getLogger(__name__)


def service_out(s: Service) -> dict:
    return {
        "id": s.id,
        "providerId": s.provider_id,
        "name": s.name,
        "description": s.description,
        "type": s.type,
        "price": s.price,
        "status": s.status,
        "location": s.location,
        "attributes": s.attributes or {},
        "createdAt": iso(as_utc(s.created_at)),
    }


def tour_out(t: Tour) -> dict:
    return {"id": t.id, "ownerId": t.owner_id, "name": t.name, "price": t.price,
            "location": t.location, "category": t.category}


def vehicle_out(v: Vehicle) -> dict:
    return {"id": v.id, "ownerId": v.owner_id, "brand": v.brand, "model": v.model, "name": v.display_name,
            "vehicleNumber": v.vehicle_number, "vehicleType": v.vehicle_type, "price": v.price,
            "location": v.location}


def restaurant_out(r: Restaurant) -> dict:
    return {"id": r.id, "ownerId": r.owner_id, "name": r.name, "address": r.address,
            "tableCount": r.table_count, "price": r.price, "status": r.status}


def create_service(db: Session, provider: User, body) -> Service:
    if body.type not in SERVICE_TYPES:
        raise ValidationError(f"type must be one of {', '.join(SERVICE_TYPES)}", fields=["type"])
    if not body.name.strip():
        raise ValidationError("name required", fields=["name"])
    s = Service(
        id=str(uuid.uuid4()),
        provider_id=provider.id,
        name=body.name.strip(),
        description=body.description,
        type=body.type,
        price=body.price,
        status="active",
        location=body.location,
        attributes=body.attributes or {},
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    logger.info("service %s (%s) created by provider %s", s.id, s.type, provider.id)
    return s


def list_provider_services(db: Session, provider: User) -> list[Service]:
    return db.query(Service).filter(Service.provider_id == provider.id).order_by(Service.created_at.desc()).all()


def update_service(db: Session, provider: User, service_id: str, body) -> Service:
    s = db.get(Service, service_id)
    if not s or s.provider_id != provider.id:
        raise NotFoundError("Service not found")
    if body.status is not None and body.status not in ("active", "inactive"):
        raise ValidationError("status must be 'active' or 'inactive'", fields=["status"])
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(s, field, value)
    log_audit(db, actor_user_id=provider.id, action="service_updated", entity_type="service",
              entity_id=s.id, details=changes)
    db.commit()
    db.refresh(s)
    return s


def list_active_services(db: Session, type_: str | None = None, q: str | None = None) -> list[Service]:
    query = db.query(Service).filter(Service.status == "active")
    if type_:
        query = query.filter(Service.type == type_)
    if q:
        like = f"%{q.lower()}%"
        query = query.filter(Service.name.ilike(like) | Service.location.ilike(like))
    return query.order_by(Service.created_at.desc()).all()


def get_active_service(db: Session, service_id: str) -> Service:
    s = db.get(Service, service_id)
    if not s or s.status != "active":
        raise NotFoundError("Service not found")
    return s


def create_tour(db: Session, provider: User, body) -> Tour:
    t = Tour(id=str(uuid.uuid4()), owner_id=provider.id, name=body.name.strip(), price=body.price,
             location=body.location, category=body.category)
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


def create_vehicle(db: Session, provider: User, body) -> Vehicle:
    v = Vehicle(id=str(uuid.uuid4()), owner_id=provider.id, brand=body.brand.strip(), model=body.model.strip(),
                vehicle_number=body.vehicleNumber, vehicle_type=body.vehicleType, price=body.price,
                location=body.location)
    db.add(v)
    db.commit()
    db.refresh(v)
    return v


def create_restaurant(db: Session, provider: User, body) -> Restaurant:
    """New restaurants wait for admin approval before they take bookings."""
    r = Restaurant(id=str(uuid.uuid4()), owner_id=provider.id, name=body.name.strip(), address=body.address,
                   table_count=body.tableCount, price=body.price, status="pending")
    db.add(r)
    db.commit()
    db.refresh(r)
    return r


def provider_catalog(db: Session, provider: User) -> dict:
    return {
        "services": [service_out(s) for s in list_provider_services(db, provider)],
        "tours": [tour_out(t) for t in db.query(Tour).filter(Tour.owner_id == provider.id).all()],
        "vehicles": [vehicle_out(v) for v in db.query(Vehicle).filter(Vehicle.owner_id == provider.id).all()],
        "restaurants": [restaurant_out(r) for r in db.query(Restaurant).filter(Restaurant.owner_id == provider.id).all()],
    }


def decide_restaurant(db: Session, admin: User, restaurant_id: str, approved: bool) -> Restaurant:
    r = db.get(Restaurant, restaurant_id)
    if not r:
        raise NotFoundError("Restaurant not found")
    r.status = "approved" if approved else "declined"
    log_audit(db, actor_user_id=admin.id, action=f"restaurant_{r.status}", entity_type="restaurant",
              entity_id=r.id, details={"name": r.name})
    db.commit()
    db.refresh(r)
    if approved:
        notify(db, r.owner_id, "Restaurant Approved", f"{r.name} is now live and accepting reservations.",
               "service_added", {"restaurantId": r.id, "status": r.status})
    else:
        notify(db, r.owner_id, "Restaurant Declined", f"{r.name} was not approved. Please contact support.",
               "service_updated", {"restaurantId": r.id, "status": r.status})
    return r
