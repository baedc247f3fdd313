"""Per-user registry of device push tokens."""

from collections.abc import Iterable

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from src.models.push_token import PushToken
from src.models.user import User

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def register_token(db: Session, user_id: int, token: str) -> None:
    """Add ``token`` to the user's set unless it is already there.

    Runs as a single ``INSERT ... ON CONFLICT DO NOTHING`` so concurrent
    logins from several devices cannot lose or duplicate tokens.
    """
    insert = _DIALECT_INSERTS[db.get_bind().dialect.name]
    stmt = (
        insert(PushToken)
        .values(user_id=user_id, token=token)
        .on_conflict_do_nothing(index_elements=["user_id", "token"])
    )
    db.execute(stmt)
    db.commit()


def tokens_for(db: Session, user_ids: Iterable[int]) -> dict[int, set[str]]:
    """Map each requested user id to its token set (empty if none)."""
    ids = set(user_ids)
    result: dict[int, set[str]] = {user_id: set() for user_id in ids}
    if not ids:
        return result

    rows = db.query(PushToken.user_id, PushToken.token).filter(PushToken.user_id.in_(ids)).all()
    for user_id, token in rows:
        result[user_id].add(token)
    return result


def tokens_for_audience(db: Session, exclude_name: str | None = None) -> set[str]:
    """Tokens of every user, optionally leaving out users with a given name."""
    query = db.query(PushToken.token).join(User, PushToken.user_id == User.id)
    if exclude_name is not None:
        query = query.filter(User.name != exclude_name)
    return {token for (token,) in query.distinct().all()}


def tokens_for_name(db: Session, name: str) -> set[str]:
    """Tokens of every user registered under ``name``."""
    query = (
        db.query(PushToken.token)
        .join(User, PushToken.user_id == User.id)
        .filter(User.name == name)
    )
    return {token for (token,) in query.distinct().all()}
