from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from travelmart.db.session import get_db
from travelmart.api.deps import require_roles
from travelmart.api.v1.routes.reservations import page_envelope
from travelmart.api.v1.routes.provider import status_response
from travelmart.core.dates import as_utc, iso
from travelmart.models.user import User
from travelmart.schemas.catalog import RestaurantDecision
from travelmart.schemas.reservation import StatusUpdate
from travelmart.services import catalog_service, status_service
from travelmart.services.aggregation_service import dashboard_stats, list_reservations

router = APIRouter(tags=["admin"])


@router.get("/admin/reservations")
def all_reservations(status: str | None = None, type: str = "all", page: int = 1, limit: int | None = None,
                     db: Session = Depends(get_db), me: User = Depends(require_roles("admin"))):
    result = list_reservations(db, me, "admin", status=status, type_=type, page=page, limit=limit)
    return {"success": True, **page_envelope(result)}


@router.put("/admin/reservations/{kind}/{reservation_id}/status")
def admin_update_status(kind: str, reservation_id: str, body: StatusUpdate, db: Session = Depends(get_db),
                        me: User = Depends(require_roles("admin"))):
    r, item = status_service.update_reservation_status(db, kind, reservation_id, me, body.status, body.rejectionReason)
    return status_response(db, kind, r, item)


@router.get("/admin/dashboard")
def dashboard(db: Session = Depends(get_db), me: User = Depends(require_roles("admin"))):
    return {"success": True, "data": dashboard_stats(db)}


@router.get("/admin/users")
def list_users(role: str | None = None, q: str | None = None, limit: int = 50, offset: int = 0,
               db: Session = Depends(get_db),
               me: User = Depends(require_roles("admin"))):
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    if q:
        ql = f"%{q.lower()}%"
        query = query.filter(func.lower(User.email).like(ql) | func.lower(User.name).like(ql))
    total = query.count()
    users = query.order_by(User.created_at.desc()).limit(min(limit, 200)).offset(max(offset, 0)).all()
    return {
        "success": True,
        "total": total,
        "data": [{"id": u.id, "email": u.email, "name": u.name, "role": u.role, "isActive": u.is_active,
                  "createdAt": iso(as_utc(u.created_at))} for u in users],
    }


@router.post("/admin/restaurants/{restaurant_id}/approve")
def approve_restaurant(restaurant_id: str, body: RestaurantDecision | None = None, db: Session = Depends(get_db),
                       me: User = Depends(require_roles("admin"))):
    approved = body.approved if body else True
    r = catalog_service.decide_restaurant(db, me, restaurant_id, approved)
    return {"success": True, "message": f"Restaurant {r.status}", "data": catalog_service.restaurant_out(r)}
