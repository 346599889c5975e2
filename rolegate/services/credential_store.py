"""Credential store: persistence of user records with atomic username uniqueness."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rolegate.core.errors import DuplicateUsernameError, StoreUnavailableError
from rolegate.core.roles import Role
from rolegate.core.security import is_password_hash
from rolegate.models import User
from rolegate.schemas.auth import UserPublic

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    User table access over a SQLAlchemy session.

    Uniqueness is enforced by the unique index on users.username, so two
    concurrent creates for the same name yield one row and one
    DuplicateUsernameError.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, username: str, password_hash: str, role: Role) -> User:
        """Insert a user. Raises DuplicateUsernameError or StoreUnavailableError."""
        if not is_password_hash(password_hash):
            raise ValueError("password_hash must be a bcrypt hash, not a plain password")
        user = User(username=username, password_hash=password_hash, role=Role(role).value)
        self.session.add(user)
        try:
            self.session.commit()
            self.session.refresh(user)
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateUsernameError(username) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("User insert failed", extra={"username": username, "reason": str(e)[:200]})
            raise StoreUnavailableError("Credential store unavailable") from e
        return user

    def find_by_username(self, username: str) -> User | None:
        try:
            return self.session.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("User lookup failed", extra={"reason": str(e)[:200]})
            raise StoreUnavailableError("Credential store unavailable") from e

    def list_all(self) -> list[UserPublic]:
        """All users ordered by id, password hashes omitted."""
        try:
            users = self.session.query(User).order_by(User.id).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("User listing failed", extra={"reason": str(e)[:200]})
            raise StoreUnavailableError("Credential store unavailable") from e
        return [UserPublic.model_validate(u) for u in users]
