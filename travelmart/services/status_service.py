import logging
import random
import string
import time

from sqlalchemy.orm import Session

from travelmart.core.config import settings
from travelmart.core.dates import utcnow, as_utc
from travelmart.core.errors import InternalError, NotFoundError, ValidationError
from travelmart.models.user import User
from travelmart.services.audit_service import log_audit
from travelmart.services.notification_service import notify, notify_admins
from travelmart.services.reservation_stores import STORES, ReservationStore, get_store

logger = logging.getLogger(__name__)

TARGET_STATUSES = ("confirmed", "cancelled")


def generate_confirmation_number(prefix: str) -> str:
    """<PREFIX><epoch millis><4 uppercase base-36 chars>, e.g. TR1718000000000K3Z9."""
    suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=4))
    return f"{prefix}{int(time.time() * 1000)}{suffix}"


def _unique_confirmation_number(db: Session, store: ReservationStore) -> str:
    for _ in range(10):
        number = generate_confirmation_number(store.prefix)
        exists = db.query(store.model).filter(store.model.confirmation_number == number).first()
        if not exists:
            return number
    raise InternalError("could not allocate confirmation number")


def apply_status(reservation, status: str, prefix: str, rejection_reason: str | None = None,
                 make_number=None):
    """Move a reservation to confirmed or cancelled in place.

    Confirming keeps an existing confirmation number; cancelling without a
    reason keeps any earlier one. Moving between the two states is allowed.
    """
    if status not in TARGET_STATUSES:
        raise ValidationError("Invalid status. Must be 'confirmed' or 'cancelled'", fields=["status"])
    reservation.status = status
    reservation.response_date = utcnow()
    if status == "confirmed" and not reservation.confirmation_number:
        reservation.confirmation_number = make_number() if make_number else generate_confirmation_number(prefix)
    if status == "cancelled" and rejection_reason:
        reservation.rejection_reason = rejection_reason
    return reservation


def _notify_customer(db: Session, store: ReservationStore, reservation, item) -> None:
    name = store.item_name(item, reservation) or "your reservation"
    check_in = as_utc(store.start_date(reservation))
    date_str = check_in.date().isoformat() if check_in else ""
    data = {"reservationId": reservation.id, "reservationType": store.kind, "serviceName": name}
    if reservation.status == "confirmed":
        data.update(confirmationNumber=reservation.confirmation_number, checkInDate=date_str)
        notify(
            db, store.customer_id(reservation), "Booking Confirmed!",
            f"Your booking for {name} has been confirmed! "
            f"Confirmation number: {reservation.confirmation_number}. Check-in: {date_str}",
            "booking_confirmed", data,
        )
    else:
        reason = reservation.rejection_reason
        tail = f"Reason: {reason}" if reason else "Please contact the provider for more information."
        data.update(rejectionReason=reason)
        notify(
            db, store.customer_id(reservation), "Booking Cancelled",
            f"Your booking for {name} has been cancelled. {tail}",
            "booking_cancelled", data,
        )


def update_reservation_status(db: Session, kind: str, reservation_id: str, actor: User, status: str,
                              rejection_reason: str | None = None):
    """Provider/admin status change. Returns the reservation and its catalog item."""
    store = get_store(kind)
    if status not in TARGET_STATUSES:
        raise ValidationError("Invalid status. Must be 'confirmed' or 'cancelled'", fields=["status"])

    # Row lock for the read-decide-write sequence
    reservation = store.get(db, reservation_id, for_update=True)
    if not reservation or (actor.role != "admin" and not store.is_provider(reservation, actor)):
        raise NotFoundError("Reservation not found or you are not authorized to update it")

    previous = reservation.status
    apply_status(reservation, status, store.prefix, rejection_reason,
                 make_number=lambda: _unique_confirmation_number(db, store))
    log_audit(db, actor_user_id=actor.id, action=f"reservation_{status}", entity_type=store.entity_type,
              entity_id=reservation.id,
              details={"from": previous, "to": status, "rejectionReason": rejection_reason,
                       "confirmationNumber": reservation.confirmation_number})
    db.commit()
    db.refresh(reservation)
    logger.info("%s %s: %s -> %s by %s", store.entity_type, reservation.id, previous, status, actor.id)

    item = store.get_item(db, reservation)
    _notify_customer(db, store, reservation, item)
    return reservation, item


def cancel_by_customer(db: Session, kind: str, reservation_id: str, customer: User):
    store = get_store(kind)
    reservation = store.get(db, reservation_id, for_update=True)
    if not reservation or not store.is_customer(reservation, customer):
        raise NotFoundError("Reservation not found")
    if reservation.status != "pending":
        raise ValidationError("Only pending reservations can be cancelled", fields=["status"])

    reservation.status = "cancelled"
    log_audit(db, actor_user_id=customer.id, action="reservation_cancelled_by_customer",
              entity_type=store.entity_type, entity_id=reservation.id, details={"from": "pending"})
    db.commit()
    db.refresh(reservation)
    logger.info("%s %s cancelled by customer %s", store.entity_type, reservation.id, customer.id)

    item = store.get_item(db, reservation)
    name = store.item_name(item, reservation) or "your listing"
    data = {"reservationId": reservation.id, "reservationType": store.kind, "serviceName": name}
    notify(
        db, store.owner_id(reservation), "Reservation Cancelled",
        f"{customer.name or customer.email} cancelled their booking for {name}.",
        "reservation_cancelled", data,
    )
    if settings.NOTIFY_ADMINS_ON_BOOKING:
        notify_admins(
            db, "Reservation Cancelled (Admin)",
            f"{customer.name or customer.email} cancelled a pending {store.kind} booking for {name}.",
            "reservation_cancelled", {**data, "customerId": customer.id},
        )
    return reservation, item


def complete_past_reservations(db: Session, now=None) -> dict:
    """Mark confirmed reservations whose end date has passed as completed."""
    now = now or utcnow()
    counts = {}
    for store in STORES.values():
        end_col = getattr(store.model, store.end_key)
        rows = (
            db.query(store.model)
            .filter(store.model.status == "confirmed", end_col < now)
            .with_for_update()
            .all()
        )
        for r in rows:
            r.status = "completed"
            log_audit(db, actor_user_id="system", action="reservation_completed",
                      entity_type=store.entity_type, entity_id=r.id, details={"from": "confirmed"})
        counts[store.kind] = len(rows)
    db.commit()
    if any(counts.values()):
        logger.info("completed past reservations: %s", counts)
    return counts
