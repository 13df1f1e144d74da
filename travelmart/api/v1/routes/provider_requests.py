from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from travelmart.db.session import get_db
from travelmart.api.deps import require_roles
from travelmart.models.user import User
from travelmart.schemas.provider_request import ProviderRequestCreate, ProviderRequestRejection
from travelmart.services import provider_request_service as requests_svc

router = APIRouter(tags=["provider-requests"])


@router.post("/provider-requests", status_code=201)
def submit(body: ProviderRequestCreate, db: Session = Depends(get_db),
           me: User = Depends(require_roles("customer", "provider"))):
    r = requests_svc.submit_request(db, me, body)
    return {"success": True, "message": "Service provider request submitted successfully",
            "data": requests_svc.request_out(r)}


@router.get("/provider-requests/me")
def my_requests(db: Session = Depends(get_db), me: User = Depends(require_roles("customer", "provider"))):
    items = requests_svc.list_user_requests(db, me)
    return {"success": True, "count": len(items), "data": [requests_svc.request_out(r) for r in items]}


@router.get("/admin/provider-requests")
def all_requests(status: str | None = None, providerType: str | None = None, db: Session = Depends(get_db),
                 me: User = Depends(require_roles("admin"))):
    items = requests_svc.list_requests(db, status, providerType)
    return {"success": True, "count": len(items), "data": [requests_svc.request_out(r) for r in items]}


@router.get("/admin/provider-requests/{request_id}")
def request_details(request_id: str, db: Session = Depends(get_db), me: User = Depends(require_roles("admin"))):
    return {"success": True, "data": requests_svc.request_out(requests_svc.get_request(db, request_id))}


@router.post("/admin/provider-requests/{request_id}/approve")
def approve(request_id: str, db: Session = Depends(get_db), me: User = Depends(require_roles("admin"))):
    r = requests_svc.approve_request(db, me, request_id)
    return {"success": True, "message": "Service provider request approved successfully",
            "data": requests_svc.request_out(r)}


@router.post("/admin/provider-requests/{request_id}/reject")
def reject(request_id: str, body: ProviderRequestRejection, db: Session = Depends(get_db),
           me: User = Depends(require_roles("admin"))):
    r = requests_svc.reject_request(db, me, request_id, body.reason)
    return {"success": True, "message": "Service provider request rejected successfully",
            "data": requests_svc.request_out(r)}
