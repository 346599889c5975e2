"""Admin-only routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from rolegate.api.access import require_admin
from rolegate.api.deps import get_auth_service
from rolegate.schemas.auth import UsersListResponse
from rolegate.services.auth_service import AuthService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/users", response_model=UsersListResponse)
def list_users(
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UsersListResponse:
    """List all users without password hashes."""
    return UsersListResponse(users=service.list_users())
