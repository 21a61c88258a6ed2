"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AccessTokenResponse,
    CurrentUser,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    RoleCreateRequest,
    RoleResponse,
    TokenPair,
    UserResponse,
    UserUpdateRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.users import RoleRecord, UserRecord

__all__ = [
    "AccessTokenResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "RoleCreateRequest",
    "RoleRecord",
    "RoleResponse",
    "TokenPair",
    "UserRecord",
    "UserResponse",
    "UserUpdateRequest",
]
