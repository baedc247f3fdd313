"""Comment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.posts import get_post_or_404
from src.database import get_db
from src.errors import ValidationError
from src.models.comment import Comment
from src.schemas.post import CommentCreate, CommentResponse

router = APIRouter(prefix="/api/posts/{post_id}/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    post_id: int,
    comment_data: CommentCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Comment on a post, optionally replying to another comment on it."""
    get_post_or_404(db, post_id)

    if comment_data.parent_id is not None:
        parent = (
            db.query(Comment)
            .filter(Comment.id == comment_data.parent_id, Comment.post_id == post_id)
            .first()
        )
        if not parent:
            raise ValidationError("Parent comment not found on this post")

    comment = Comment(
        post_id=post_id,
        parent_id=comment_data.parent_id,
        content=comment_data.content,
        username=comment_data.username,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


@router.get("", response_model=list[CommentResponse])
def get_comments(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get all comments on a post, newest first."""
    get_post_or_404(db, post_id)
    return (
        db.query(Comment)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )
