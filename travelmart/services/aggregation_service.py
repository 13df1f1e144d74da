"""Unified reservation listings over all four reservation tables."""
import logging
import math

from sqlalchemy import func
from sqlalchemy.orm import Session

from travelmart.core.config import settings
from travelmart.core.dates import as_utc
from travelmart.core.errors import ValidationError
from travelmart.models.user import User
from travelmart.models.service_reservation import RESERVATION_STATUSES
from travelmart.services.reservation_stores import STORES, ReservationStore

logger = logging.getLogger(__name__)

SCOPES = ("customer", "provider", "admin")


def _check_filters(status, type_, page, limit) -> int:
    if status is not None and status not in RESERVATION_STATUSES:
        raise ValidationError(f"Invalid status filter: {status}", fields=["status"])
    if type_ != "all" and type_ not in STORES:
        raise ValidationError(f"Invalid type filter: {type_}", fields=["type"])
    if page < 1:
        raise ValidationError("page must be at least 1", fields=["page"])
    if limit is None:
        limit = settings.DEFAULT_PAGE_LIMIT
    if not 1 <= limit <= settings.MAX_PAGE_LIMIT:
        raise ValidationError(f"limit must be between 1 and {settings.MAX_PAGE_LIMIT}", fields=["limit"])
    return limit


def _load_store(db: Session, store: ReservationStore, actor: User, scope: str, status: str | None) -> list:
    """Rows of one store visible to the actor, paired with the sort key and normalised record.

    Rows whose catalog item (or, for vehicle rentals, customer account) no
    longer exists are left out.
    """
    q = db.query(store.model)
    if scope == "customer":
        q = q.filter(store.customer_filter(actor))
    elif scope == "provider":
        q = q.filter(store.provider_filter(actor))
    if status:
        q = q.filter(store.model.status == status)
    rows = q.all()
    if not rows:
        return []

    item_ids = {getattr(r, store.item_key) for r in rows}
    items = {i.id: i for i in db.query(store.item_model).filter(store.item_model.id.in_(item_ids)).all()}
    customers = {}
    if store.joins_customer:
        customer_ids = {store.customer_id(r) for r in rows}
        customers = {u.id: u for u in db.query(User).filter(User.id.in_(customer_ids)).all()}

    out, skipped = [], 0
    for r in rows:
        item = items.get(getattr(r, store.item_key))
        customer = customers.get(store.customer_id(r)) if store.joins_customer else None
        if item is None or (store.joins_customer and customer is None):
            skipped += 1
            continue
        out.append(((as_utc(r.created_at), r.id), store.normalize(r, item, customer)))
    if skipped:
        logger.debug("skipped %d %s rows with dangling references", skipped, store.kind)
    return out


def list_reservations(db: Session, actor: User, scope: str, status: str | None = None, type_: str = "all",
                      page: int = 1, limit: int | None = None) -> dict:
    if scope not in SCOPES:
        raise ValueError(f"unknown scope {scope}")
    type_ = type_ or "all"
    limit = _check_filters(status, type_, page, limit)

    selected = STORES.values() if type_ == "all" else [STORES[type_]]
    merged = []
    # every selected store must load; any failure fails the whole listing
    for store in selected:
        merged.extend(_load_store(db, store, actor, scope, status))

    # newest first, id breaks ties so pages are stable
    merged.sort(key=lambda pair: pair[0], reverse=True)
    total = len(merged)
    start = (page - 1) * limit
    items = [record for _, record in merged[start:start + limit]]
    return {
        "items": items,
        "count": len(items),
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit) if total else 0,
    }


def dashboard_stats(db: Session) -> dict:
    users = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())
    reservations = {}
    by_status = {s: 0 for s in RESERVATION_STATUSES}
    revenue = 0.0
    for store in STORES.values():
        counts = dict(db.query(store.model.status, func.count(store.model.id)).group_by(store.model.status).all())
        reservations[store.kind] = {"total": sum(counts.values()), **{s: counts.get(s, 0) for s in RESERVATION_STATUSES}}
        for s in RESERVATION_STATUSES:
            by_status[s] += counts.get(s, 0)
        total_col = getattr(store.model, store.total_key)
        revenue += float(
            db.query(func.coalesce(func.sum(total_col), 0))
            .filter(store.model.status.in_(["confirmed", "completed"]))
            .scalar() or 0
        )
    return {
        "users": {
            "total": sum(users.values()),
            "customers": users.get("customer", 0),
            "providers": users.get("provider", 0),
            "admins": users.get("admin", 0),
        },
        "reservations": {
            "total": sum(v["total"] for v in reservations.values()),
            "byType": reservations,
            "byStatus": by_status,
        },
        "revenue": revenue,
    }
