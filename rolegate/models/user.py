"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import CheckConstraint, Column, Integer, String

from rolegate.core.roles import DEFAULT_ROLE
from rolegate.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'Admin', 'User' or 'Moderator'. password_hash is always a bcrypt hash.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('Admin', 'User', 'Moderator')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE.value)
