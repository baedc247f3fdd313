"""Server-side login session model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from src.database import Base


class UserSession(Base):
    """A live login session.

    Only a keyed hash of the session id is stored; the raw id exists solely in
    the client's cookie.
    """

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_hash = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    principal = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    # Relationships
    user = relationship("User", backref="sessions")
