"""Password hashing and JWT access/refresh token issuing and verification."""

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import SecretStr

from app.core.errors import ConfigurationError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Input validation bounds shared by the request schemas and the CLI.
NAME_MAX_LEN = 255
EMAIL_MIN_LEN = 3
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=7)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Empty or malformed hashes never match."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class InvalidTokenError(Exception):
    """Raised when a token has a bad signature, is expired or carries malformed claims."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _secret_value(secret: SecretStr | str | None) -> str | None:
    if isinstance(secret, SecretStr):
        secret = secret.get_secret_value()
    if not secret or not secret.strip():
        return None
    return secret


class TokenIssuer:
    """
    Signs and verifies access and refresh tokens with distinct secrets.

    Access token claims: userId, roleId, permissions, iat, exp.
    Refresh token claims: userId, iat, exp.

    Both secrets are needed for every issuance; a missing one raises
    ConfigurationError at call time rather than at construction.
    """

    def __init__(
        self,
        access_secret: SecretStr | str | None,
        refresh_secret: SecretStr | str | None,
        algorithm: str = "HS256",
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._access_secret = _secret_value(access_secret)
        self._refresh_secret = _secret_value(refresh_secret)
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenIssuer":
        issuer = cls(
            access_secret=settings.ACCESS_TOKEN_SECRET,
            refresh_secret=settings.REFRESH_TOKEN_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )
        for missing in issuer.missing_secrets():
            logger.warning("%s is not configured; token issuance will fail.", missing)
        return issuer

    def missing_secrets(self) -> list[str]:
        missing = []
        if self._access_secret is None:
            missing.append("ACCESS_TOKEN_SECRET")
        if self._refresh_secret is None:
            missing.append("REFRESH_TOKEN_SECRET")
        return missing

    def require_secrets(self) -> None:
        """Raise ConfigurationError unless both signing secrets are configured."""
        if self._access_secret is None:
            raise ConfigurationError("Access token secret not found")
        if self._refresh_secret is None:
            raise ConfigurationError("Refresh token secret not found")

    def _encode(self, claims: dict[str, Any], secret: str, ttl: timedelta) -> str:
        now = self._clock()
        payload = {**claims, "iat": now, "exp": now + ttl}
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def _decode(self, token: str, secret: str, required: list[str]) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", *required]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token expired") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Token rejected: {e}") from e

    def issue_access_token(
        self, user_id: str, role_id: str, permissions: Sequence[str]
    ) -> str:
        self.require_secrets()
        return self._encode(
            {"userId": user_id, "roleId": role_id, "permissions": list(permissions)},
            self._access_secret,
            self.access_ttl,
        )

    def issue_refresh_token(self, user_id: str) -> str:
        self.require_secrets()
        return self._encode({"userId": user_id}, self._refresh_secret, self.refresh_ttl)

    def verify_refresh_token(self, token: str) -> str:
        """Return the userId embedded in a valid, unexpired refresh token."""
        if self._refresh_secret is None:
            raise ConfigurationError("Refresh token secret not found")
        payload = self._decode(token, self._refresh_secret, ["userId"])
        user_id = payload["userId"]
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("Token rejected: malformed userId claim")
        return user_id

    def decode_access_token(self, token: str) -> dict[str, Any]:
        """
        Decode and validate an access token; return its claims.
        Raises InvalidTokenError on invalid or expired token.
        """
        if self._access_secret is None:
            raise ConfigurationError("Access token secret not found")
        payload = self._decode(token, self._access_secret, ["userId", "roleId"])
        if not isinstance(payload.get("permissions"), list):
            raise InvalidTokenError("Token rejected: malformed permissions claim")
        return payload
