"""ORM model for the server-side copy of each user's refresh token."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func

from app.models.base import Base


class RefreshToken(Base):
    """One row per user; saving a new token overwrites the previous one."""

    __tablename__ = "refresh_tokens"

    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    token = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
