"""Login, logout and session check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from src.api.dependencies import get_optional_principal, get_session_id, get_session_store
from src.config import get_settings
from src.database import get_db
from src.errors import NotFoundError
from src.schemas.auth import LoginResponse, SessionStatus, StatusMessage, UserLogin, UserResponse
from src.services.auth import authenticate
from src.services.push_tokens import register_token
from src.services.session_store import Principal, SessionStore

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
):
    """Login with email and password, registering the device's push token."""
    result = authenticate(db, credentials.email, credentials.password)
    if not result.ok:
        return LoginResponse(login=False)

    user = result.user
    if credentials.push_token:
        register_token(db, user.id, credentials.push_token)

    settings = get_settings()
    session_id = store.create(user)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )

    return LoginResponse(login=True, user=UserResponse.model_validate(user))


@router.post("/logout", response_model=StatusMessage)
def logout(
    response: Response,
    session_id: Annotated[str | None, Depends(get_session_id)],
    store: Annotated[SessionStore, Depends(get_session_store)],
):
    """Destroy the caller's session and clear the cookie."""
    response.delete_cookie(get_settings().session_cookie_name)
    try:
        store.destroy(session_id)
    except NotFoundError:
        return StatusMessage(message="No active session")
    return StatusMessage(message="Logged out successfully")


@router.get("/", response_model=SessionStatus, response_model_exclude_none=True)
def check_session(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
):
    """Report whether the caller has a live session."""
    if principal is None:
        return SessionStatus(valid=False)
    return SessionStatus(valid=True, name=principal.name)
