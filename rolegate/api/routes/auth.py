"""Registration, login, and caller identity."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from rolegate.api.access import require_authenticated
from rolegate.api.deps import get_auth_service
from rolegate.schemas.auth import (
    LoginRequest,
    LoginResponse,
    Principal,
    RegisterRequest,
    RegisterResponse,
)
from rolegate.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """Create a user. Role defaults to User. 400 on invalid input or taken username."""
    service.register(body.username, body.password, body.role)
    return RegisterResponse()


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT and the user's role.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = service.login(body.username, body.password)
    return LoginResponse(token=result.token, role=result.role)


@router.get("/me", response_model=Principal)
def me(principal: Annotated[Principal, Depends(require_authenticated)]) -> Principal:
    """Identity and role from the caller's token (no database lookup)."""
    return principal
