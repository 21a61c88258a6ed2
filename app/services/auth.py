"""
Auth service: register, update, login, refresh and role creation.

Each operation is a short sequence of store calls with fail-fast checks; it
either returns its result or raises exactly one AppError subclass.
"""

import logging
import uuid
from collections.abc import Callable
from typing import Any

from app.core.errors import (
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from app.core.security import InvalidTokenError, TokenIssuer, hash_password, verify_password
from app.schemas.auth import TokenPair
from app.schemas.users import RoleRecord, UserRecord
from app.services.credential_store import CredentialStore
from app.services.permissions import resolve_permissions

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
ROLE_NOT_ASSIGNED = "Role not assigned"

# Columns that cannot be set to NULL; a None value for them means "leave unchanged".
_REQUIRED_USER_FIELDS = frozenset({"first_name", "last_name"})
_UPDATABLE_USER_FIELDS = frozenset({"first_name", "last_name", "email", "phone", "role_id"})


def _new_id() -> str:
    return str(uuid.uuid4())


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        issuer: TokenIssuer,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.store = store
        self.issuer = issuer
        self._new_id = id_factory

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        phone: str | None = None,
        role_id: str | None = None,
    ) -> UserRecord:
        """Create a user with a unique email. Raises ConflictError if the email is taken."""
        if self.store.find_user_by_email(email) is not None:
            raise ConflictError("User already exists", "User with this email already exists")

        user = self.store.create_user(
            id=self._new_id(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password),
            phone=phone,
            role_id=role_id,
        )
        if user is None:
            raise InternalError("Something went wrong while creating user")
        logger.info("User registered", extra={"user_id": user.id})
        return user

    def update_user(self, user_id: str, fields: dict[str, Any]) -> UserRecord:
        """Apply the given fields to an existing user. Raises NotFoundError for unknown ids."""
        if self.store.find_user_by_id(user_id) is None:
            raise NotFoundError("User not found", "User with this id does not exist")

        changes = {
            key: value
            for key, value in fields.items()
            if key in _UPDATABLE_USER_FIELDS
            and not (key in _REQUIRED_USER_FIELDS and value is None)
        }
        user = self.store.update_user(user_id, changes)
        if user is None:
            raise InternalError("Something went wrong while updating user")
        return user

    def _permissions_for(self, role_id: str) -> list[str]:
        # A dangling role reference resolves to no permissions.
        return resolve_permissions(self.store.find_role_by_id(role_id))

    def login(self, email: str, password: str) -> TokenPair:
        """
        Verify credentials and issue an access/refresh token pair.

        Unknown email and wrong password fail identically. The refresh token is
        persisted (overwriting any previous one) before the pair is returned.
        """
        user = self.store.find_user_by_email(email)
        if user is None:
            raise UnauthorizedError(INVALID_CREDENTIALS)

        password_hash = self.store.find_password_by_id(user.id) or ""
        if not verify_password(password, password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not user.role_id:
            raise UnauthorizedError(ROLE_NOT_ASSIGNED)

        permissions = self._permissions_for(user.role_id)
        self.issuer.require_secrets()

        access_token = self.issuer.issue_access_token(user.id, user.role_id, permissions)
        refresh_token = self.issuer.issue_refresh_token(user.id)

        if not self.store.save_refresh_token(user.id, refresh_token):
            raise InternalError("Error saving refresh token")

        logger.info("User logged in", extra={"user_id": user.id})
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def refresh(self, refresh_token: str) -> str:
        """Exchange a valid refresh token for a new access token reflecting the user's current role."""
        try:
            user_id = self.issuer.verify_refresh_token(refresh_token)
        except InvalidTokenError as e:
            logger.warning("Refresh token rejected", extra={"reason": e.message})
            raise ForbiddenError("Token not valid") from e

        user = self.store.find_user_by_id(user_id)
        if user is None:
            raise UnauthorizedError("User not found")
        if not user.role_id:
            raise UnauthorizedError(ROLE_NOT_ASSIGNED)

        permissions = self._permissions_for(user.role_id)
        self.issuer.require_secrets()
        return self.issuer.issue_access_token(user.id, user.role_id, permissions)

    def create_role(self, name: str, **flags: bool) -> RoleRecord:
        """Persist a new role with the given capability flags."""
        role = self.store.create_role(id=self._new_id(), name=name, **flags)
        if role is None:
            raise InternalError("Something went wrong while creating role")
        logger.info("Role created", extra={"role_id": role.id, "role_name": role.name})
        return role
