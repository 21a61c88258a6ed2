"""SQLAlchemy declarative Base shared by the user, role and refresh-token models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
