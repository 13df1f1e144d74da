from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from travelmart.db.session import get_db
from travelmart.api.deps import require_roles
from travelmart.models.user import User
from travelmart.schemas.catalog import ServiceCreate, ServiceUpdate, TourCreate, VehicleCreate, RestaurantCreate
from travelmart.services import catalog_service as catalog

router = APIRouter(tags=["catalog"])


@router.get("/services")
def list_services(type: str | None = None, q: str | None = None, db: Session = Depends(get_db)):
    items = catalog.list_active_services(db, type, q)
    return {"success": True, "count": len(items), "data": [catalog.service_out(s) for s in items]}


@router.get("/services/{service_id}")
def get_service(service_id: str, db: Session = Depends(get_db)):
    return {"success": True, "data": catalog.service_out(catalog.get_active_service(db, service_id))}


@router.post("/provider/services", status_code=201)
def create_service(body: ServiceCreate, db: Session = Depends(get_db),
                   me: User = Depends(require_roles("provider"))):
    s = catalog.create_service(db, me, body)
    return {"success": True, "message": "Service created", "data": catalog.service_out(s)}


@router.get("/provider/services")
def my_services(db: Session = Depends(get_db), me: User = Depends(require_roles("provider"))):
    items = catalog.list_provider_services(db, me)
    return {"success": True, "count": len(items), "data": [catalog.service_out(s) for s in items]}


@router.patch("/provider/services/{service_id}")
def update_service(service_id: str, body: ServiceUpdate, db: Session = Depends(get_db),
                   me: User = Depends(require_roles("provider"))):
    s = catalog.update_service(db, me, service_id, body)
    return {"success": True, "message": "Service updated", "data": catalog.service_out(s)}


@router.post("/provider/tours", status_code=201)
def create_tour(body: TourCreate, db: Session = Depends(get_db), me: User = Depends(require_roles("provider"))):
    return {"success": True, "data": catalog.tour_out(catalog.create_tour(db, me, body))}


@router.post("/provider/vehicles", status_code=201)
def create_vehicle(body: VehicleCreate, db: Session = Depends(get_db), me: User = Depends(require_roles("provider"))):
    return {"success": True, "data": catalog.vehicle_out(catalog.create_vehicle(db, me, body))}


@router.post("/provider/restaurants", status_code=201)
def create_restaurant(body: RestaurantCreate, db: Session = Depends(get_db),
                      me: User = Depends(require_roles("provider"))):
    r = catalog.create_restaurant(db, me, body)
    return {"success": True, "message": "Restaurant submitted for approval", "data": catalog.restaurant_out(r)}


@router.get("/provider/catalog")
def my_catalog(db: Session = Depends(get_db), me: User = Depends(require_roles("provider"))):
    return {"success": True, "data": catalog.provider_catalog(db, me)}
