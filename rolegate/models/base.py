"""Declarative Base whose metadata names indexes and constraints the way the migrations do."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# ix_users_username, uq_users_username, pk_users: keeps autogenerate diffs stable.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
