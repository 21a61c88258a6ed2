"""Unit tests for app.core.security: bcrypt hashing and the access/refresh TokenIssuer."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

import jwt
from pydantic import SecretStr

from app.core.errors import ConfigurationError, InternalError
from app.core.security import (
    InvalidTokenError,
    TokenIssuer,
    hash_password,
    verify_password,
)

ACCESS_SECRET = "access-secret-for-tests-0123456789abcdef"
REFRESH_SECRET = "refresh-secret-for-tests-0123456789abcdef"


def _issuer(clock_offset: timedelta = timedelta(0), **kwargs: object) -> TokenIssuer:
    """Issuer whose clock runs clock_offset away from real time."""
    defaults: dict[str, object] = {
        "access_secret": ACCESS_SECRET,
        "refresh_secret": REFRESH_SECRET,
    }
    defaults.update(kwargs)
    return TokenIssuer(clock=lambda: datetime.now(UTC) + clock_offset, **defaults)


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password round trip and failure cases."""

    def setUp(self) -> None:
        patcher = patch("app.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_hash_is_salted_and_verifies(self) -> None:
        h1 = hash_password("correct horse battery")
        h2 = hash_password("correct horse battery")
        self.assertNotEqual(h1, h2)
        self.assertNotIn("correct horse", h1)
        self.assertTrue(verify_password("correct horse battery", h1))
        self.assertTrue(verify_password("correct horse battery", h2))

    def test_wrong_password_fails(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertFalse(verify_password("other-password", hashed))

    def test_empty_or_malformed_hash_fails(self) -> None:
        self.assertFalse(verify_password("anything", ""))
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """Access tokens carry userId, roleId and permissions and expire after 15 minutes."""

    def test_claims(self) -> None:
        token = _issuer().issue_access_token("u1", "r1", ["canManageUser", "canViewReport"])
        payload = jwt.decode(token, ACCESS_SECRET, algorithms=["HS256"])
        self.assertEqual(payload["userId"], "u1")
        self.assertEqual(payload["roleId"], "r1")
        self.assertEqual(payload["permissions"], ["canManageUser", "canViewReport"])
        self.assertEqual(payload["exp"] - payload["iat"], 15 * 60)

    def test_not_signed_with_refresh_secret(self) -> None:
        token = _issuer().issue_access_token("u1", "r1", [])
        with self.assertRaises(jwt.InvalidSignatureError):
            jwt.decode(token, REFRESH_SECRET, algorithms=["HS256"])

    def test_decode_access_token(self) -> None:
        issuer = _issuer()
        payload = issuer.decode_access_token(issuer.issue_access_token("u1", "r1", ["canViewReport"]))
        self.assertEqual(payload["permissions"], ["canViewReport"])

    def test_valid_just_before_expiry(self) -> None:
        token = _issuer(clock_offset=-timedelta(minutes=14)).issue_access_token("u1", "r1", [])
        self.assertEqual(_issuer().decode_access_token(token)["userId"], "u1")

    def test_expired_after_15_minutes(self) -> None:
        token = _issuer(clock_offset=-timedelta(minutes=16)).issue_access_token("u1", "r1", [])
        with self.assertRaises(InvalidTokenError) as ctx:
            _issuer().decode_access_token(token)
        self.assertEqual(ctx.exception.message, "Token expired")


class TestRefreshToken(unittest.TestCase):
    """Refresh tokens carry only userId, last 7 days and verify with the refresh secret."""

    def test_claims_and_verify(self) -> None:
        issuer = _issuer()
        token = issuer.issue_refresh_token("u1")
        payload = jwt.decode(token, REFRESH_SECRET, algorithms=["HS256"])
        self.assertEqual(set(payload), {"userId", "iat", "exp"})
        self.assertEqual(payload["exp"] - payload["iat"], 7 * 24 * 3600)
        self.assertEqual(issuer.verify_refresh_token(token), "u1")

    def test_expired(self) -> None:
        token = _issuer(clock_offset=-timedelta(days=7, minutes=1)).issue_refresh_token("u1")
        with self.assertRaises(InvalidTokenError):
            _issuer().verify_refresh_token(token)

    def test_still_valid_within_7_days(self) -> None:
        token = _issuer(clock_offset=-timedelta(days=6)).issue_refresh_token("u1")
        self.assertEqual(_issuer().verify_refresh_token(token), "u1")

    def test_access_token_is_not_a_refresh_token(self) -> None:
        issuer = _issuer()
        with self.assertRaises(InvalidTokenError):
            issuer.verify_refresh_token(issuer.issue_access_token("u1", "r1", []))

    def test_tampered_payload(self) -> None:
        issuer = _issuer()
        header, _, signature = issuer.issue_refresh_token("u1").split(".")
        _, payload, _ = issuer.issue_refresh_token("u2").split(".")
        # u2's payload under u1's signature must be rejected
        forged = ".".join([header, payload, signature])
        with self.assertRaises(InvalidTokenError):
            issuer.verify_refresh_token(forged)

    def test_garbage(self) -> None:
        with self.assertRaises(InvalidTokenError):
            _issuer().verify_refresh_token("not.a.token")

    def test_missing_user_id_claim(self) -> None:
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(days=1)}, REFRESH_SECRET, algorithm="HS256"
        )
        with self.assertRaises(InvalidTokenError):
            _issuer().verify_refresh_token(token)


class TestMissingSecrets(unittest.TestCase):
    """Every issuance fails with ConfigurationError when either secret is missing."""

    def test_missing_access_secret(self) -> None:
        issuer = _issuer(access_secret=None)
        self.assertEqual(issuer.missing_secrets(), ["ACCESS_TOKEN_SECRET"])
        with self.assertRaises(ConfigurationError):
            issuer.issue_access_token("u1", "r1", [])
        with self.assertRaises(ConfigurationError):
            issuer.issue_refresh_token("u1")

    def test_missing_refresh_secret(self) -> None:
        issuer = _issuer(refresh_secret="   ")
        self.assertEqual(issuer.missing_secrets(), ["REFRESH_TOKEN_SECRET"])
        with self.assertRaises(ConfigurationError) as ctx:
            issuer.issue_access_token("u1", "r1", [])
        self.assertIsInstance(ctx.exception, InternalError)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertFalse(ctx.exception.is_operational)
        with self.assertRaises(ConfigurationError):
            issuer.verify_refresh_token("anything")


class TestFromSettings(unittest.TestCase):
    """TokenIssuer.from_settings reads secrets, algorithm and lifetimes from Settings."""

    def test_builds_from_settings(self) -> None:
        settings = MagicMock()
        settings.ACCESS_TOKEN_SECRET = SecretStr(ACCESS_SECRET)
        settings.REFRESH_TOKEN_SECRET = SecretStr(REFRESH_SECRET)
        settings.JWT_ALGORITHM = "HS256"
        settings.ACCESS_TOKEN_EXPIRE_MINUTES = 15
        settings.REFRESH_TOKEN_EXPIRE_DAYS = 7
        issuer = TokenIssuer.from_settings(settings)
        self.assertEqual(issuer.missing_secrets(), [])
        self.assertEqual(issuer.access_ttl, timedelta(minutes=15))
        self.assertEqual(issuer.refresh_ttl, timedelta(days=7))

    def test_logs_missing_secrets(self) -> None:
        settings = MagicMock()
        settings.ACCESS_TOKEN_SECRET = None
        settings.REFRESH_TOKEN_SECRET = None
        settings.JWT_ALGORITHM = "HS256"
        settings.ACCESS_TOKEN_EXPIRE_MINUTES = 15
        settings.REFRESH_TOKEN_EXPIRE_DAYS = 7
        with self.assertLogs("app.core.security", level="WARNING") as logs:
            issuer = TokenIssuer.from_settings(settings)
        self.assertEqual(len(logs.records), 2)
        self.assertEqual(
            issuer.missing_secrets(), ["ACCESS_TOKEN_SECRET", "REFRESH_TOKEN_SECRET"]
        )


if __name__ == "__main__":
    unittest.main()
