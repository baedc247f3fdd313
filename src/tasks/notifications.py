"""Celery tasks for push notification fan-out after content is saved."""

import asyncio
import logging

from sqlalchemy.orm import Session

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.services.notification_service import (
    fan_out_new_message,
    fan_out_new_post,
    get_dispatcher,
)

logger = logging.getLogger(__name__)


@celery_app.task
def notify_new_post(post_id: int) -> dict:
    """Push a new post to every other user's devices.

    Returns:
        DispatchReport as a dict
    """
    db: Session = SessionLocal()
    try:
        report = asyncio.run(fan_out_new_post(db, post_id, get_dispatcher()))
        return report.model_dump()
    finally:
        db.close()


@celery_app.task
def notify_new_message(message_id: int) -> dict:
    """Push a direct message to the receiver's devices.

    Returns:
        DispatchReport as a dict
    """
    db: Session = SessionLocal()
    try:
        report = asyncio.run(fan_out_new_message(db, message_id, get_dispatcher()))
        return report.model_dump()
    finally:
        db.close()


def queue_notification(task, record_id: int) -> None:
    """Enqueue a fan-out task without letting broker trouble fail the write."""
    try:
        task.delay(record_id)
    except Exception as e:
        logger.error(f"Failed to queue {task.name} for {record_id}: {e}")
