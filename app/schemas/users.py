"""Records exchanged with the credential store (no password hashes)."""

from pydantic import BaseModel, ConfigDict


class RoleRecord(BaseModel):
    """Role with its ten capability flags."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    can_manage_assessment: bool = False
    can_manage_user: bool = False
    can_manage_role: bool = False
    can_manage_notification: bool = False
    can_manage_local_group: bool = False
    can_manage_reports: bool = False
    can_attempt_assessment: bool = False
    can_view_report: bool = False
    can_manage_my_account: bool = False
    can_view_notification: bool = False


class UserRecord(BaseModel):
    """User as returned by the store and the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    role_id: str | None = None
