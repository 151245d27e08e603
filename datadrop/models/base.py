"""Declarative base shared by the ORM models and the alembic autogenerate target."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
