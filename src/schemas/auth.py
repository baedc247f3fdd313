"""Authentication and account schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

NAME_PATTERN = r"^[a-zA-Z\s]{2,50}$"


class UserRegister(BaseModel):
    """User registration request."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., pattern=NAME_PATTERN)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=72)


class UserLogin(BaseModel):
    """User login request, optionally carrying the device's push token."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=72)
    push_token: str | None = Field(None, alias="pushToken", min_length=1, max_length=255)


class PasswordChange(BaseModel):
    """Change the password of the logged-in user."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    current_password: str = Field(..., alias="currentPassword", min_length=1, max_length=72)
    new_password: str = Field(..., alias="newPassword", min_length=8, max_length=72)


class TokenUpdate(BaseModel):
    """Register a push token for a user identified by name."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=50)
    push_token: str = Field(..., alias="pushToken", min_length=1, max_length=255)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class UserSummary(BaseModel):
    """Public user listing entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class LoginResponse(BaseModel):
    """Login outcome; ``user`` is present only on success."""

    model_config = ConfigDict(populate_by_name=True)

    login: bool = Field(..., alias="Login")
    user: UserResponse | None = None


class SessionStatus(BaseModel):
    """Result of a session check."""

    valid: bool
    name: str | None = None


class StatusMessage(BaseModel):
    """Plain acknowledgement."""

    message: str
