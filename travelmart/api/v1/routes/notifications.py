from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from travelmart.db.session import get_db
from travelmart.api.deps import get_current_user
from travelmart.core.config import settings
from travelmart.models.user import User
from travelmart.services import notification_service

router = APIRouter(tags=["notifications"])


@router.get("/notifications")
def list_notifications(page: int = 1, limit: int | None = None, unreadOnly: bool = False,
                       db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    result = notification_service.list_notifications(
        db, me, page=page, limit=limit or settings.DEFAULT_PAGE_LIMIT,
        unread_only=unreadOnly,
    )
    return {
        "success": True,
        "data": result["items"],
        "count": len(result["items"]),
        "total": result["total"],
        "unreadCount": result["unreadCount"],
        "page": result["page"],
        "limit": result["limit"],
        "totalPages": result["totalPages"],
    }


@router.put("/notifications/read-all")
def read_all(db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    updated = notification_service.mark_all_read(db, me)
    return {"success": True, "message": f"{updated} notification(s) marked as read"}


@router.put("/notifications/{notification_id}/read")
def read_one(notification_id: str, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    n = notification_service.mark_read(db, me, notification_id)
    return {"success": True, "data": notification_service.notification_out(n)}


@router.delete("/notifications/{notification_id}")
def delete_one(notification_id: str, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    notification_service.delete_notification(db, me, notification_id)
    return {"success": True, "message": "Notification deleted"}
