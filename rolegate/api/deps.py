"""Shared dependencies for route handlers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from rolegate.core.database import get_db
from rolegate.core.security import TokenIssuer, get_token_issuer
from rolegate.services.auth_service import AuthService
from rolegate.services.credential_store import CredentialStore


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    """Dependency: auth service bound to the request's DB session."""
    return AuthService(CredentialStore(db), tokens)
