"""Pydantic request/response schemas."""

from rolegate.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginResult,
    Principal,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
    UserPublic,
    UsersListResponse,
)
from rolegate.schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginResult",
    "Principal",
    "RegisterRequest",
    "RegisterResponse",
    "TokenClaims",
    "UserPublic",
    "UsersListResponse",
]
