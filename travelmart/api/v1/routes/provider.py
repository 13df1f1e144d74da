from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from travelmart.db.session import get_db
from travelmart.api.deps import require_roles
from travelmart.api.v1.routes.reservations import page_envelope
from travelmart.models.user import User
from travelmart.schemas.reservation import StatusUpdate
from travelmart.services import status_service
from travelmart.services.aggregation_service import list_reservations
from travelmart.services.reservation_stores import STORES

router = APIRouter(tags=["provider"])


def status_response(db: Session, kind: str, reservation, item) -> dict:
    store = STORES[kind]
    customer = db.get(User, store.customer_id(reservation)) if store.joins_customer else None
    return {
        "success": True,
        "message": f"Reservation {reservation.status} successfully",
        "data": store.normalize(reservation, item, customer),
    }


@router.get("/provider/reservations")
def provider_reservations(status: str | None = None, type: str = "all", page: int = 1, limit: int | None = None,
                          db: Session = Depends(get_db), me: User = Depends(require_roles("provider"))):
    result = list_reservations(db, me, "provider", status=status, type_=type, page=page, limit=limit)
    return {"success": True, **page_envelope(result)}


@router.put("/provider/reservations/{kind}/{reservation_id}/status")
def update_status(kind: str, reservation_id: str, body: StatusUpdate, db: Session = Depends(get_db),
                  me: User = Depends(require_roles("provider", "admin"))):
    r, item = status_service.update_reservation_status(db, kind, reservation_id, me, body.status, body.rejectionReason)
    return status_response(db, kind, r, item)
