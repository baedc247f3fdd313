"""Comment model."""

from sqlalchemy import Column, Integer, String, Text

from src.database import Base
from src.models.mixins import TimestampMixin


class Comment(Base, TimestampMixin):
    """Threaded comment on a post.

    ``post_id`` and ``parent_id`` are checked when the comment is created but
    are not foreign keys: deleting a post leaves its comments in place.
    A null ``parent_id`` marks a top-level comment.
    """

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, nullable=False, index=True)
    parent_id = Column(Integer, nullable=True, index=True)
    content = Column(Text, nullable=False)
    username = Column(String(50), nullable=False)
