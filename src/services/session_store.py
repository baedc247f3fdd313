"""Server-side session store backed by the ``sessions`` table."""

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.errors import NotFoundError
from src.models.session import UserSession
from src.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated identity behind a session."""

    user_id: int
    name: str


class SessionStore:
    """Create, resolve and destroy login sessions.

    Any API instance sharing the database can resolve any live session.
    Sessions have a fixed lifetime from creation and are not renewed.
    """

    def __init__(self, db: Session, settings: Settings | None = None) -> None:
        self.db = db
        self.settings = settings or get_settings()

    def _hash(self, session_id: str) -> str:
        return hmac.new(
            self.settings.session_secret.encode(), session_id.encode(), hashlib.sha256
        ).hexdigest()

    def create(self, user: User) -> str:
        """Start a session for ``user`` and return the opaque session id."""
        session_id = secrets.token_urlsafe(32)
        expires_at = datetime.now(UTC) + timedelta(minutes=self.settings.session_ttl_minutes)
        self.db.add(
            UserSession(
                session_hash=self._hash(session_id),
                user_id=user.id,
                principal=user.name,
                expires_at=expires_at,
            )
        )
        self.db.commit()
        logger.info(f"Session created for user {user.id}")
        return session_id

    def _live(self, session_id: str) -> UserSession | None:
        return (
            self.db.query(UserSession)
            .filter(
                UserSession.session_hash == self._hash(session_id),
                UserSession.expires_at > datetime.now(UTC),
            )
            .first()
        )

    def resolve(self, session_id: str | None) -> Principal | None:
        """Return the principal for a live session, or None."""
        if not session_id:
            return None
        record = self._live(session_id)
        if record is None:
            return None
        return Principal(user_id=record.user_id, name=record.principal)

    def destroy(self, session_id: str | None) -> None:
        """End a session. Raises NotFoundError if it is not live."""
        record = self._live(session_id) if session_id else None
        if record is None:
            raise NotFoundError("Session not found")
        user_id = record.user_id
        self.db.delete(record)
        self.db.commit()
        logger.info(f"Session destroyed for user {user_id}")

    def purge_expired(self) -> int:
        """Delete expired sessions and return how many were removed."""
        removed = (
            self.db.query(UserSession)
            .filter(UserSession.expires_at <= datetime.now(UTC))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removed
