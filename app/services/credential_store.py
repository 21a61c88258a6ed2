"""Credential store: persistence of users, password hashes, roles and refresh tokens."""

import logging
from collections.abc import Callable
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import RefreshToken, Role, User
from app.schemas.users import RoleRecord, UserRecord

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """
    Operations the auth service needs from storage.

    Lookups return None when nothing matches; writes return None (or False)
    when the store could not persist the record.
    """

    def find_user_by_email(self, email: str) -> UserRecord | None: ...

    def find_user_by_id(self, user_id: str) -> UserRecord | None: ...

    def find_password_by_id(self, user_id: str) -> str | None: ...

    def find_role_by_id(self, role_id: str) -> RoleRecord | None: ...

    def create_user(self, **fields: Any) -> UserRecord | None: ...

    def update_user(self, user_id: str, fields: dict[str, Any]) -> UserRecord | None: ...

    def create_role(self, **fields: Any) -> RoleRecord | None: ...

    def save_refresh_token(self, user_id: str, token: str) -> bool: ...


class SqlCredentialStore:
    """CredentialStore backed by a SQLAlchemy session (one per request)."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_user_by_email(self, email: str) -> UserRecord | None:
        user = self.db.query(User).filter(User.email == email).first()
        return UserRecord.model_validate(user) if user is not None else None

    def find_user_by_id(self, user_id: str) -> UserRecord | None:
        user = self.db.get(User, user_id)
        return UserRecord.model_validate(user) if user is not None else None

    def find_password_by_id(self, user_id: str) -> str | None:
        return self.db.query(User.password_hash).filter(User.id == user_id).scalar()

    def find_role_by_id(self, role_id: str) -> RoleRecord | None:
        role = self.db.get(Role, role_id)
        return RoleRecord.model_validate(role) if role is not None else None

    def _commit(
        self, action: str, stage: Callable[[], object] | None = None, **log_fields: Any
    ) -> bool:
        """Run stage (if any) and commit; on a database error roll back and return False."""
        try:
            if stage is not None:
                stage()
            self.db.commit()
            return True
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Credential store write failed: %s", action, extra=log_fields)
            return False

    def create_user(self, **fields: Any) -> UserRecord | None:
        user = User(**fields)
        self.db.add(user)
        if not self._commit("create_user", user_id=fields.get("id")):
            return None
        self.db.refresh(user)
        return UserRecord.model_validate(user)

    def update_user(self, user_id: str, fields: dict[str, Any]) -> UserRecord | None:
        user = self.db.get(User, user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        if not self._commit("update_user", user_id=user_id):
            return None
        self.db.refresh(user)
        return UserRecord.model_validate(user)

    def create_role(self, **fields: Any) -> RoleRecord | None:
        role = Role(**fields)
        self.db.add(role)
        if not self._commit("create_role", role_id=fields.get("id")):
            return None
        self.db.refresh(role)
        return RoleRecord.model_validate(role)

    def save_refresh_token(self, user_id: str, token: str) -> bool:
        # merge on the primary key: last write wins for concurrent logins
        return self._commit(
            "save_refresh_token",
            lambda: self.db.merge(RefreshToken(user_id=user_id, token=token)),
            user_id=user_id,
        )
