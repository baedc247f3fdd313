"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    LoginResponse,
    PasswordChange,
    SessionStatus,
    StatusMessage,
    TokenUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
    UserSummary,
)
from src.schemas.message import DirectMessageResponse, MessageCreate
from src.schemas.notification import BatchFailure, DispatchReport, PushPayload
from src.schemas.post import CommentCreate, CommentResponse, PostCreate, PostResponse, PostUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "UserSummary",
    "LoginResponse",
    "PasswordChange",
    "SessionStatus",
    "StatusMessage",
    "TokenUpdate",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
    "CommentCreate",
    "CommentResponse",
    "MessageCreate",
    "DirectMessageResponse",
    "PushPayload",
    "BatchFailure",
    "DispatchReport",
]
