import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import OperationalError, ProgrammingError
from travelmart.db.session import SessionLocal
from travelmart.services.status_service import complete_past_reservations as _complete

logger = logging.getLogger(__name__)

def complete_past_reservations():
    db: Session = SessionLocal()
    try:
        try:
            counts = _complete(db)
        except (ProgrammingError, OperationalError):
            # DB not migrated yet; don't crash the worker.
            db.rollback()
            logger.warning("reservation tables missing, skipping completion sweep")
            return {"skipped": True, "reason": "missing_tables"}
        return {"completed": sum(counts.values()), "byType": counts}
    finally:
        db.close()
