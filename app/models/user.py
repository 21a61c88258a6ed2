"""ORM model for platform users."""

from sqlalchemy import Column, ForeignKey, String

from app.models.base import Base


class User(Base):
    """
    User account. The password hash lives here but is only read through
    CredentialStore.find_password_by_id.

    role_id: nullable; a user without a role cannot log in.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, unique=True, index=True)
    phone = Column(String(32), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(
        String(36),
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
