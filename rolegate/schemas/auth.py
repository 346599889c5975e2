"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rolegate.core.roles import Role


class RegisterRequest(BaseModel):
    """Registration body. Lengths and role are validated by the auth service."""

    username: str = Field(..., description="Unique username")
    password: str = Field(..., description="Plain-text password (hashed before storage)")
    role: str | None = Field(
        default=None,
        description="One of Admin, User, Moderator; defaults to User",
    )


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Signed access token and the role it was issued for."""

    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    role: Role = Field(..., description="Role embedded in the token")


class LoginResult(BaseModel):
    """Outcome of a successful login."""

    model_config = ConfigDict(frozen=True)

    token: str
    role: Role


class TokenClaims(BaseModel):
    """Verified identity carried by an access token."""

    model_config = ConfigDict(frozen=True)

    subject_id: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class Principal(BaseModel):
    """
    Caller identity decoded from a verified token.

    Returned by the access-control dependencies and attached to request.state.principal.
    """

    model_config = ConfigDict(frozen=True)

    subject_id: str = Field(..., description="User id from the token sub claim")
    role: Role = Field(..., description="Role at token issuance")


class UserPublic(BaseModel):
    """User record without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role


class UsersListResponse(BaseModel):
    """Response for GET /admin/users (admin only)."""

    users: list[UserPublic]
