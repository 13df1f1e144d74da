import logging
import uuid

from sqlalchemy.orm import Session

from travelmart.core.dates import as_utc, iso, utcnow
from travelmart.core.errors import NotFoundError, ValidationError, missing_fields_error
from travelmart.models.provider_request import ProviderRequest, REQUEST_STATUSES
from travelmart.models.service import SERVICE_TYPES
from travelmart.models.user import User
from travelmart.services.audit_service import log_audit
from travelmart.services.notification_service import notify, notify_admins

logger = logging.getLogger(__name__)

REQUIRED = ("providerType", "firstName", "lastName", "businessName", "businessPhone")


def request_out(r: ProviderRequest) -> dict:
    return {
        "id": r.id,
        "userId": r.user_id,
        "providerType": r.provider_type,
        "firstName": r.first_name,
        "lastName": r.last_name,
        "businessName": r.business_name,
        "businessPhone": r.business_phone,
        "businessEmail": r.business_email,
        "businessAddress": r.business_address,
        "details": r.details or {},
        "documents": r.documents or {},
        "additionalInfo": r.additional_info,
        "status": r.status,
        "rejectionReason": r.rejection_reason,
        "reviewedBy": r.reviewed_by,
        "reviewedAt": iso(as_utc(r.reviewed_at)),
        "submittedAt": iso(as_utc(r.created_at)),
    }


def submit_request(db: Session, user: User, body) -> ProviderRequest:
    missing = [f for f in REQUIRED if not (getattr(body, f, None) or "").strip()]
    if missing:
        raise missing_fields_error(missing)
    if body.providerType not in SERVICE_TYPES:
        raise ValidationError(f"providerType must be one of {', '.join(SERVICE_TYPES)}", fields=["providerType"])

    # one open or approved application per provider type; other types may be applied for separately
    existing = (
        db.query(ProviderRequest)
        .filter(
            ProviderRequest.user_id == user.id,
            ProviderRequest.provider_type == body.providerType,
            ProviderRequest.status.in_(["pending", "approved"]),
        )
        .first()
    )
    if existing:
        raise ValidationError(
            f"You already have a {existing.status} service provider request for {body.providerType}",
            fields=["providerType"],
        )

    r = ProviderRequest(
        id=str(uuid.uuid4()),
        user_id=user.id,
        provider_type=body.providerType,
        first_name=body.firstName.strip(),
        last_name=body.lastName.strip(),
        business_name=body.businessName.strip(),
        business_phone=body.businessPhone.strip(),
        business_email=(body.businessEmail or "").strip().lower(),
        business_address=body.businessAddress or "",
        details=body.details or {},
        documents=body.documents or {},
        additional_info=body.additionalInfo or "",
        status="pending",
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    logger.info("provider request %s (%s) submitted by %s", r.id, r.provider_type, user.id)

    notify_admins(
        db, "New Service Provider Request",
        f"{r.first_name} {r.last_name} applied to list {r.provider_type} services as {r.business_name}.",
        "provider_request_submitted",
        {"requestId": r.id, "providerType": r.provider_type, "userId": user.id},
    )
    return r


def list_requests(db: Session, status: str | None = None, provider_type: str | None = None) -> list[ProviderRequest]:
    if status is not None and status not in REQUEST_STATUSES:
        raise ValidationError(f"Invalid status filter: {status}", fields=["status"])
    q = db.query(ProviderRequest)
    if status:
        q = q.filter(ProviderRequest.status == status)
    if provider_type:
        q = q.filter(ProviderRequest.provider_type == provider_type)
    return q.order_by(ProviderRequest.created_at.desc()).all()


def list_user_requests(db: Session, user: User) -> list[ProviderRequest]:
    return (
        db.query(ProviderRequest)
        .filter(ProviderRequest.user_id == user.id)
        .order_by(ProviderRequest.created_at.desc())
        .all()
    )


def get_request(db: Session, request_id: str, for_update: bool = False) -> ProviderRequest:
    q = db.query(ProviderRequest).filter(ProviderRequest.id == request_id)
    if for_update:
        q = q.with_for_update()
    r = q.first()
    if not r:
        raise NotFoundError("Service provider request not found")
    return r


def _pending(db: Session, request_id: str) -> ProviderRequest:
    r = get_request(db, request_id, for_update=True)
    if r.status != "pending":
        raise ValidationError("Request has already been processed", fields=["status"])
    return r


def approve_request(db: Session, admin: User, request_id: str) -> ProviderRequest:
    """Approve an application and promote the applicant to provider."""
    r = _pending(db, request_id)
    r.status = "approved"
    r.reviewed_by = admin.id
    r.reviewed_at = utcnow()

    applicant = db.get(User, r.user_id)
    if applicant and applicant.role == "customer":
        applicant.role = "provider"
    log_audit(db, actor_user_id=admin.id, action="provider_request_approved", entity_type="provider_request",
              entity_id=r.id, details={"userId": r.user_id, "providerType": r.provider_type})
    db.commit()
    db.refresh(r)
    logger.info("provider request %s approved by %s", r.id, admin.id)

    notify(
        db, r.user_id, "Provider Request Approved",
        f"Your request to list {r.provider_type} services as {r.business_name} has been approved. "
        "You can now add your listings.",
        "provider_request_approved",
        {"requestId": r.id, "providerType": r.provider_type},
    )
    return r


def reject_request(db: Session, admin: User, request_id: str, reason: str | None) -> ProviderRequest:
    if not (reason or "").strip():
        raise ValidationError("Rejection reason is required", fields=["reason"])
    r = _pending(db, request_id)
    r.status = "rejected"
    r.rejection_reason = reason.strip()
    r.reviewed_by = admin.id
    r.reviewed_at = utcnow()
    log_audit(db, actor_user_id=admin.id, action="provider_request_rejected", entity_type="provider_request",
              entity_id=r.id, details={"reason": r.rejection_reason})
    db.commit()
    db.refresh(r)
    logger.info("provider request %s rejected by %s", r.id, admin.id)

    notify(
        db, r.user_id, "Provider Request Rejected",
        f"Your request to list {r.provider_type} services was not approved. Reason: {r.rejection_reason}",
        "provider_request_rejected",
        {"requestId": r.id, "providerType": r.provider_type, "rejectionReason": r.rejection_reason},
    )
    return r
