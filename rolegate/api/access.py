"""
Role-based access control for routes.

One gate handles every protected route: it extracts the bearer token,
verifies it, and checks the token's role against a RoleRequirement.
Admin-only, Moderator-only and any-authenticated routes are instances
of the same dependency with different requirements.
"""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict

from rolegate.core.errors import ForbiddenError, TokenError, TokenExpiredError, UnauthenticatedError
from rolegate.core.roles import Role
from rolegate.core.security import TokenIssuer, get_token_issuer
from rolegate.schemas.auth import Principal

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


class RoleRequirement(BaseModel):
    """Predicate over the token's role claim. roles=None means any authenticated caller."""

    model_config = ConfigDict(frozen=True)

    roles: frozenset[Role] | None = None

    @classmethod
    def any_authenticated(cls) -> "RoleRequirement":
        return cls(roles=None)

    @classmethod
    def exactly(cls, role: Role) -> "RoleRequirement":
        return cls(roles=frozenset({Role(role)}))

    @classmethod
    def one_of(cls, *roles: Role) -> "RoleRequirement":
        if not roles:
            raise ValueError("one_of requires at least one role")
        return cls(roles=frozenset(Role(r) for r in roles))

    def allows(self, role: Role) -> bool:
        return self.roles is None or role in self.roles

    def describe(self) -> str:
        if self.roles is None:
            return "any authenticated user"
        return " or ".join(sorted(r.value for r in self.roles))


def authenticate(
    credentials: HTTPAuthorizationCredentials | None,
    tokens: TokenIssuer,
) -> Principal:
    """Verify the bearer credentials. Raises UnauthenticatedError."""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("No token provided")
    try:
        claims = tokens.verify(credentials.credentials)
    except TokenExpiredError as e:
        raise UnauthenticatedError("Token has expired") from e
    except TokenError as e:
        logger.info("Token rejected", extra={"reason": e.message})
        raise UnauthenticatedError("Invalid token") from e
    return Principal(subject_id=claims.subject_id, role=claims.role)


def require(requirement: RoleRequirement) -> Callable[..., Principal]:
    """
    Build a FastAPI dependency enforcing requirement.

    Missing or invalid token -> UnauthenticatedError (401).
    Role not allowed -> ForbiddenError (403).
    """

    def dependency(
        request: Request,
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
        tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
    ) -> Principal:
        principal = authenticate(credentials, tokens)
        if not requirement.allows(principal.role):
            logger.warning(
                "Access denied",
                extra={
                    "subject_id": principal.subject_id,
                    "role": principal.role.value,
                    "required": requirement.describe(),
                    "path": request.url.path,
                },
            )
            raise ForbiddenError(f"Access denied: {requirement.describe()} only")
        request.state.principal = principal
        return principal

    return dependency


require_authenticated = require(RoleRequirement.any_authenticated())
require_admin = require(RoleRequirement.exactly(Role.ADMIN))
require_moderator = require(RoleRequirement.exactly(Role.MODERATOR))
