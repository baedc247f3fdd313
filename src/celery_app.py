"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab

from src.config import get_settings

settings = get_settings()

app = Celery(
    "social_app",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["src.tasks.notifications", "src.tasks.sessions"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=120,  # 2 minutes max per task
    task_soft_time_limit=90,
    beat_schedule={
        "purge-expired-sessions": {
            "task": "src.tasks.sessions.purge_expired_sessions",
            "schedule": crontab(minute=0),
        },
    },
)
