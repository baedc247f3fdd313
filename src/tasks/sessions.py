"""Celery tasks for session housekeeping."""

import logging

from sqlalchemy.orm import Session

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.services.session_store import SessionStore

logger = logging.getLogger(__name__)


@celery_app.task
def purge_expired_sessions() -> dict:
    """Delete expired login sessions. Runs hourly via celery-beat."""
    db: Session = SessionLocal()
    try:
        removed = SessionStore(db).purge_expired()
        logger.info(f"Purged {removed} expired sessions")
        return {"removed": removed}
    finally:
        db.close()
