"""ORM model for roles: a named bundle of capability flags."""

from sqlalchemy import Boolean, Column, String, false

from app.models.base import Base


def _flag() -> Column:
    return Column(Boolean, nullable=False, default=False, server_default=false())


class Role(Base):
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    can_manage_assessment = _flag()
    can_manage_user = _flag()
    can_manage_role = _flag()
    can_manage_notification = _flag()
    can_manage_local_group = _flag()
    can_manage_reports = _flag()
    can_attempt_assessment = _flag()
    can_view_report = _flag()
    can_manage_my_account = _flag()
    can_view_notification = _flag()
