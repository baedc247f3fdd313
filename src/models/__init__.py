"""SQLAlchemy models."""

from src.models.comment import Comment
from src.models.message import Message
from src.models.post import Post
from src.models.push_token import PushToken
from src.models.session import UserSession
from src.models.user import User

__all__ = [
    "User",
    "PushToken",
    "UserSession",
    "Post",
    "Comment",
    "Message",
]
