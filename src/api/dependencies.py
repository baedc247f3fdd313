"""FastAPI dependencies for sessions and database access."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.errors import AuthenticationError
from src.models.user import User
from src.services.session_store import Principal, SessionStore


def get_session_store(db: Annotated[Session, Depends(get_db)]) -> SessionStore:
    """Get the session store bound to the request's database session."""
    return SessionStore(db)


def get_session_id(request: Request) -> str | None:
    """Read the opaque session id from the session cookie."""
    return request.cookies.get(get_settings().session_cookie_name)


def get_optional_principal(
    session_id: Annotated[str | None, Depends(get_session_id)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> Principal | None:
    """Resolve the caller's session, if any."""
    return store.resolve(session_id)


def get_current_user(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the logged-in user, rejecting requests without a live session."""
    if principal is None:
        raise AuthenticationError("Not logged in")

    user = db.query(User).filter(User.id == principal.user_id).first()
    if user is None:
        raise AuthenticationError("User not found")

    return user
