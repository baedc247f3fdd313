"""Post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import NotFoundError
from src.models.post import Post
from src.schemas.auth import StatusMessage
from src.schemas.post import PostCreate, PostResponse, PostUpdate
from src.tasks.notifications import notify_new_post, queue_notification

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_or_404(db: Session, post_id: int) -> Post:
    """Get a post by id or raise NotFoundError."""
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise NotFoundError("Post not found")
    return post


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a post and notify other users once it is saved."""
    post = Post(content=post_data.content, username=post_data.username)
    db.add(post)
    db.commit()
    db.refresh(post)

    queue_notification(notify_new_post, post.id)

    return post


@router.get("", response_model=list[PostResponse])
def get_posts(
    db: Annotated[Session, Depends(get_db)],
):
    """Get all posts, newest first."""
    return db.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).all()


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single post."""
    return get_post_or_404(db, post_id)


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    post_data: PostUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Replace a post's content."""
    post = get_post_or_404(db, post_id)
    post.content = post_data.content
    db.commit()
    db.refresh(post)
    return post


@router.delete("/{post_id}", response_model=StatusMessage)
def delete_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a post. Its comments are left in place."""
    post = get_post_or_404(db, post_id)
    db.delete(post)
    db.commit()
    return StatusMessage(message="Post deleted successfully")
