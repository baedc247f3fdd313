"""Authentication service for password handling and account creation."""

from dataclasses import dataclass

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import ConflictError, ValidationError
from src.models.user import User

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


@dataclass
class AuthResult:
    """Outcome of a credential check. ``user`` is set only when ``ok``."""

    ok: bool
    user: User | None = None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_name(db: Session, name: str) -> User | None:
    """Get the earliest registered user with this display name."""
    return db.query(User).filter(User.name == name).order_by(User.id).first()


def register(db: Session, name: str, email: str, password: str) -> User:
    """Create a new user, storing only the password hash."""
    if get_user_by_email(db, email):
        raise ConflictError("Email already registered")

    user = User(name=name, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("Email already registered") from None
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> AuthResult:
    """Authenticate a user by email and password.

    Unknown emails and wrong passwords produce the same result.
    """
    user = get_user_by_email(db, email)
    if not user:
        return AuthResult(ok=False)
    if not verify_password(password, user.password_hash):
        return AuthResult(ok=False)
    return AuthResult(ok=True, user=user)


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """Replace a user's password after checking the current one."""
    if not verify_password(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")

    user.password_hash = get_password_hash(new_password)
    db.commit()
