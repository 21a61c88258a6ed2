"""Unit tests for app.services.credential_store.SqlCredentialStore against a mocked Session."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from app.models import RefreshToken
from app.services.credential_store import SqlCredentialStore


def _user_fields(**kwargs: object) -> dict[str, object]:
    fields: dict[str, object] = {
        "id": "u1",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone": None,
        "password_hash": "$2b$04$hash",
        "role_id": None,
    }
    fields.update(kwargs)
    return fields


class TestLookups(unittest.TestCase):
    def test_unknown_email_is_none(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        self.assertIsNone(SqlCredentialStore(session).find_user_by_email("x@example.com"))

    def test_unknown_id_is_none(self) -> None:
        session = MagicMock()
        session.get.return_value = None
        store = SqlCredentialStore(session)
        self.assertIsNone(store.find_user_by_id("u1"))
        self.assertIsNone(store.find_role_by_id("r1"))

    def test_password_lookup_returns_hash_only(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.scalar.return_value = "$2b$04$hash"
        self.assertEqual(SqlCredentialStore(session).find_password_by_id("u1"), "$2b$04$hash")


class TestCreateUser(unittest.TestCase):
    def test_returns_record_without_hash(self) -> None:
        session = MagicMock()
        user = SqlCredentialStore(session).create_user(**_user_fields())
        self.assertEqual(user.id, "u1")
        self.assertNotIn("password_hash", user.model_dump())
        session.add.assert_called_once()
        session.commit.assert_called_once()

    def test_commit_failure_returns_none_and_rolls_back(self) -> None:
        session = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))
        with self.assertLogs("app.services.credential_store", level="ERROR"):
            user = SqlCredentialStore(session).create_user(**_user_fields())
        self.assertIsNone(user)
        session.rollback.assert_called_once()


class TestUpdateUser(unittest.TestCase):
    def test_missing_user_returns_none(self) -> None:
        session = MagicMock()
        session.get.return_value = None
        self.assertIsNone(SqlCredentialStore(session).update_user("u1", {"phone": "1"}))
        session.commit.assert_not_called()


class TestSaveRefreshToken(unittest.TestCase):
    def test_merges_on_user_id(self) -> None:
        session = MagicMock()
        self.assertTrue(SqlCredentialStore(session).save_refresh_token("u1", "tok"))
        merged = session.merge.call_args.args[0]
        self.assertIsInstance(merged, RefreshToken)
        self.assertEqual((merged.user_id, merged.token), ("u1", "tok"))
        session.commit.assert_called_once()

    def test_failure_returns_false(self) -> None:
        session = MagicMock()
        session.commit.side_effect = OperationalError("UPDATE", {}, Exception("gone"))
        with self.assertLogs("app.services.credential_store", level="ERROR"):
            saved = SqlCredentialStore(session).save_refresh_token("u1", "tok")
        self.assertFalse(saved)
        session.rollback.assert_called_once()

    def test_merge_failure_returns_false(self) -> None:
        session = MagicMock()
        session.merge.side_effect = OperationalError("SELECT", {}, Exception("gone"))
        with self.assertLogs("app.services.credential_store", level="ERROR"):
            saved = SqlCredentialStore(session).save_refresh_token("u1", "tok")
        self.assertFalse(saved)
        session.rollback.assert_called_once()
        session.commit.assert_not_called()


if __name__ == "__main__":
    unittest.main()
