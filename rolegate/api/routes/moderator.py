"""Moderator-only routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from rolegate.api.access import require_moderator
from rolegate.schemas.auth import Principal

router = APIRouter()


@router.get("/me", response_model=Principal)
def moderator_me(principal: Annotated[Principal, Depends(require_moderator)]) -> Principal:
    """Identity of the calling moderator."""
    return principal
