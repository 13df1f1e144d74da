import logging
import uuid

from sqlalchemy.orm import Session

from travelmart.core.config import settings
from travelmart.core.errors import NotFoundError, ValidationError
from travelmart.core.dates import iso, as_utc
from travelmart.models.notification import Notification, NOTIFICATION_TYPES
from travelmart.models.user import User

logger = logging.getLogger(__name__)


def notify(db: Session, recipient_id: str, title: str, message: str, type_tag: str, data: dict | None = None) -> Notification | None:
    """Persist a notification for one user. Never raises.

    Call only after the business change has been committed: a failure here
    rolls back the session, and the caller's work must already be durable.
    """
    try:
        if type_tag not in NOTIFICATION_TYPES:
            raise ValueError(f"unknown notification type {type_tag!r}")
        n = Notification(
            id=str(uuid.uuid4()),
            user_id=recipient_id,
            title=title,
            message=message,
            type=type_tag,
            read=False,
            data=data or {},
        )
        db.add(n)
        db.commit()
        return n
    except Exception:
        db.rollback()
        logger.exception("notification %s for user %s not created", type_tag, recipient_id)
        return None


def notify_admins(db: Session, title: str, message: str, type_tag: str, data: dict | None = None) -> int:
    """Fan out to every active admin; returns how many were created."""
    try:
        admin_ids = [u.id for u in db.query(User).filter(User.role == "admin", User.is_active.is_(True)).all()]
    except Exception:
        db.rollback()
        logger.exception("could not load admins for %s notification", type_tag)
        return 0
    created = 0
    for admin_id in admin_ids:
        if notify(db, admin_id, title, message, type_tag, data):
            created += 1
    return created


def notification_out(n: Notification) -> dict:
    return {
        "id": n.id,
        "title": n.title,
        "message": n.message,
        "type": n.type,
        "read": n.read,
        "data": n.data or {},
        "createdAt": iso(as_utc(n.created_at)),
    }


def list_notifications(db: Session, user: User, page: int = 1, limit: int = 20, unread_only: bool = False) -> dict:
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive", fields=["page", "limit"])
    limit = min(limit, settings.MAX_PAGE_LIMIT)
    q = db.query(Notification).filter(Notification.user_id == user.id)
    if unread_only:
        q = q.filter(Notification.read.is_(False))
    total = q.count()
    items = (
        q.order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    unread = db.query(Notification).filter(Notification.user_id == user.id, Notification.read.is_(False)).count()
    return {
        "items": [notification_out(n) for n in items],
        "total": total,
        "unreadCount": unread,
        "page": page,
        "limit": limit,
        "totalPages": (total + limit - 1) // limit,
    }


def _owned(db: Session, user: User, notification_id: str) -> Notification:
    n = db.get(Notification, notification_id)
    if not n or n.user_id != user.id:
        raise NotFoundError("Notification not found")
    return n


def mark_read(db: Session, user: User, notification_id: str) -> Notification:
    n = _owned(db, user, notification_id)
    n.read = True
    db.commit()
    return n


def mark_all_read(db: Session, user: User) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user.id, Notification.read.is_(False))
        .update({Notification.read: True}, synchronize_session=False)
    )
    db.commit()
    return updated


def delete_notification(db: Session, user: User, notification_id: str) -> None:
    n = _owned(db, user, notification_id)
    db.delete(n)
    db.commit()
