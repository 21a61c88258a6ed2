"""Request/response schemas for auth, user and role endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import (
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from app.schemas.users import RoleRecord, UserRecord


class RegisterRequest(BaseModel):
    """New account details."""

    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    email: str = Field(..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    phone: str | None = Field(default=None, max_length=32)
    role_id: str | None = None


class UserUpdateRequest(BaseModel):
    """Partial user update; fields left out of the body are unchanged."""

    first_name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)
    last_name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)
    email: str | None = Field(default=None, min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    phone: str | None = Field(default=None, max_length=32)
    role_id: str | None = None


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenPair(BaseModel):
    """Access and refresh token returned after successful login."""

    access_token: str = Field(..., description="JWT access token (15 minutes)")
    refresh_token: str = Field(..., description="JWT refresh token (7 days)")
    token_type: str = Field(default="bearer", description="Token type")


class AccessTokenResponse(BaseModel):
    access_token: str = Field(..., description="JWT access token (15 minutes)")
    token_type: str = Field(default="bearer", description="Token type")


class RoleCreateRequest(BaseModel):
    """Role name plus capability flags; unspecified flags default to false."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
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


class CurrentUser(BaseModel):
    """Claims of a verified access token, for dependency injection."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    role_id: str = Field(alias="roleId")
    permissions: list[str]


class UserResponse(BaseModel):
    message: str
    data: UserRecord


class RoleResponse(BaseModel):
    message: str
    data: RoleRecord
