"""User account endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.errors import NotFoundError
from src.models.user import User
from src.schemas.auth import PasswordChange, StatusMessage, TokenUpdate, UserRegister, UserSummary
from src.services.auth import change_password, get_user_by_name, register
from src.services.push_tokens import register_token

router = APIRouter(tags=["users"])


@router.post("/users", response_model=StatusMessage, status_code=status.HTTP_201_CREATED)
def register_user(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    register(db, user_data.name, user_data.email, user_data.password)
    return StatusMessage(message="User registered successfully")


@router.get("/users", response_model=list[UserSummary])
def list_users(
    db: Annotated[Session, Depends(get_db)],
):
    """List all users by id and name."""
    return db.query(User).order_by(User.id).all()


@router.put("/users/me/password", response_model=StatusMessage)
def update_password(
    password_data: PasswordChange,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Change the logged-in user's password."""
    change_password(db, current_user, password_data.current_password, password_data.new_password)
    return StatusMessage(message="Password updated successfully")


@router.post("/update-token", response_model=StatusMessage)
def update_push_token(
    token_data: TokenUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a push token for the user with the given name."""
    user = get_user_by_name(db, token_data.name)
    if not user:
        raise NotFoundError("User not found")

    register_token(db, user.id, token_data.push_token)
    return StatusMessage(message="Push token updated successfully")
