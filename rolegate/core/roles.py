"""The fixed set of user roles."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "Admin"
    USER = "User"
    MODERATOR = "Moderator"


DEFAULT_ROLE = Role.USER

ROLE_VALUES: frozenset[str] = frozenset(r.value for r in Role)
