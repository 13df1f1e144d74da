from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from travelmart.db.session import get_db
from travelmart.api.deps import get_current_user, require_roles
from travelmart.models.user import User
from travelmart.schemas.reservation import (
    ServiceReservationCreate, TourReservationCreate, VehicleReservationCreate, RestaurantReservationCreate,
)
from travelmart.services import reservation_service, status_service
from travelmart.services.aggregation_service import list_reservations
from travelmart.services.reservation_stores import STORES

router = APIRouter(tags=["reservations"])


def _created(kind: str, row, item, customer: User) -> dict:
    return {
        "success": True,
        "message": "Reservation created successfully",
        "data": STORES[kind].normalize(row, item, customer),
    }


@router.post("/reservations", status_code=201)
def create_reservation(body: ServiceReservationCreate, db: Session = Depends(get_db),
                       me: User = Depends(require_roles("customer"))):
    r, service = reservation_service.create_service_reservation(db, me, body)
    return _created("service", r, service, me)


@router.post("/tours/{tour_id}/reservations", status_code=201)
def book_tour(tour_id: str, body: TourReservationCreate, db: Session = Depends(get_db),
              me: User = Depends(require_roles("customer"))):
    r, tour = reservation_service.create_tour_reservation(db, me, tour_id, body)
    return _created("tour", r, tour, me)


@router.post("/vehicles/{vehicle_id}/reservations", status_code=201)
def book_vehicle(vehicle_id: str, body: VehicleReservationCreate, db: Session = Depends(get_db),
                 me: User = Depends(require_roles("customer"))):
    r, vehicle = reservation_service.create_vehicle_reservation(db, me, vehicle_id, body)
    return _created("vehicle", r, vehicle, me)


@router.post("/restaurants/{restaurant_id}/reservations", status_code=201)
def book_restaurant(restaurant_id: str, body: RestaurantReservationCreate, db: Session = Depends(get_db),
                    me: User = Depends(require_roles("customer"))):
    r, restaurant = reservation_service.create_restaurant_reservation(db, me, restaurant_id, body)
    return _created("restaurant", r, restaurant, me)


@router.get("/reservations/me")
def my_reservations(status: str | None = None, type: str = "all", page: int = 1, limit: int | None = None,
                    db: Session = Depends(get_db), me: User = Depends(require_roles("customer"))):
    result = list_reservations(db, me, "customer", status=status, type_=type, page=page, limit=limit)
    return {"success": True, **page_envelope(result)}


@router.get("/reservations/{kind}/{reservation_id}")
def reservation_details(kind: str, reservation_id: str, db: Session = Depends(get_db),
                        me: User = Depends(get_current_user)):
    return {"success": True, "data": reservation_service.get_reservation_details(db, kind, reservation_id, me)}


@router.post("/reservations/{kind}/{reservation_id}/cancel")
def cancel_reservation(kind: str, reservation_id: str, db: Session = Depends(get_db),
                       me: User = Depends(require_roles("customer"))):
    r, item = status_service.cancel_by_customer(db, kind, reservation_id, me)
    return {"success": True, "message": "Reservation cancelled",
            "data": STORES[kind].normalize(r, item, me)}


@router.delete("/reservations/{kind}/{reservation_id}")
def delete_reservation(kind: str, reservation_id: str, db: Session = Depends(get_db),
                       me: User = Depends(require_roles("customer"))):
    reservation_service.delete_reservation(db, kind, reservation_id, me)
    return {"success": True, "message": "Reservation deleted successfully"}


def page_envelope(result: dict) -> dict:
    """Render an aggregated listing in the list envelope."""
    return {
        "count": result["count"],
        "total": result["total"],
        "page": result["page"],
        "limit": result["limit"],
        "totalPages": result["totalPages"],
        "data": result["items"],
    }
