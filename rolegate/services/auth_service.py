"""Registration and login: validate input, hash once, persist, verify, issue tokens."""

import logging

from rolegate.core.errors import AuthValidationError, InvalidCredentialsError
from rolegate.core.roles import DEFAULT_ROLE, ROLE_VALUES, Role
from rolegate.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    TokenIssuer,
    hash_password,
    verify_password,
)
from rolegate.models import User
from rolegate.schemas.auth import LoginResult, UserPublic
from rolegate.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

# Verified against when the username is unknown so both login failures cost one bcrypt check.
_DUMMY_HASH = hash_password("rolegate-timing-equalizer")


def _validate_username(username: str) -> str:
    if not isinstance(username, str):
        raise AuthValidationError("Username must be a string.")
    username = username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        raise AuthValidationError(
            f"Username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters."
        )
    return username


def _validate_password(password: str) -> None:
    if not isinstance(password, str):
        raise AuthValidationError("Password must be a string.")
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise AuthValidationError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
        )


def _resolve_role(role: str | Role | None) -> Role:
    if role is None:
        return DEFAULT_ROLE
    value = role.value if isinstance(role, Role) else role
    if value not in ROLE_VALUES:
        raise AuthValidationError(
            f"Role must be one of {', '.join(r.value for r in Role)}."
        )
    return Role(value)


class AuthService:
    """Orchestrates the credential store, password hasher and token issuer."""

    def __init__(self, store: CredentialStore, tokens: TokenIssuer) -> None:
        self.store = store
        self.tokens = tokens

    def register(self, username: str, password: str, role: str | Role | None = None) -> User:
        """
        Create a user with a freshly hashed password; role defaults to User.
        Raises AuthValidationError or DuplicateUsernameError.
        """
        username = _validate_username(username)
        _validate_password(password)
        resolved_role = _resolve_role(role)

        user = self.store.create(username, hash_password(password), resolved_role)
        logger.info(
            "User registered",
            extra={"user_id": user.id, "username": user.username, "role": user.role},
        )
        return user

    def login(self, username: str, password: str) -> LoginResult:
        """Return a token and role, or raise InvalidCredentialsError (same error for either failure)."""
        if not isinstance(username, str) or not isinstance(password, str):
            raise InvalidCredentialsError()

        user = self.store.find_by_username(username.strip())
        if user is None:
            verify_password(password, _DUMMY_HASH)
            logger.info("Login failed", extra={"reason": "unknown_user"})
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"reason": "bad_password", "user_id": user.id})
            raise InvalidCredentialsError()

        role = Role(user.role)
        token = self.tokens.issue(user.id, role)
        logger.info("Login succeeded", extra={"user_id": user.id, "role": role.value})
        return LoginResult(token=token, role=role)

    def list_users(self) -> list[UserPublic]:
        return self.store.list_all()
