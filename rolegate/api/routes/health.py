"""Liveness check for the auth service."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rolegate.core.config import settings
from rolegate.core.database import check_db_connected, get_db
from rolegate.core.security import TokenIssuer, get_token_issuer
from rolegate.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> HealthResponse:
    """Unauthenticated. Reports whether the user table is reachable and how tokens are issued."""
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        token_algorithm=tokens.algorithm,
        token_lifetime_minutes=int(tokens.lifetime.total_seconds() // 60),
    )
