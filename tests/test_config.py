"""Unit tests for app.core.config: startup validation of required and bounded settings."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.core.config import Settings

_BASE_ENV = {
    "JWT_SECRET": "config-test-secret",
    "DATABASE_URL": "sqlite://",
}


def _settings(**overrides: str) -> Settings:
    """Build Settings from a clean environment (no .env file)."""
    env = {**_BASE_ENV, **overrides}
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


class TestJwtSecretRequired(unittest.TestCase):
    """A missing or blank JWT_SECRET is a fatal configuration error."""

    def test_missing_secret_raises(self) -> None:
        with patch.dict(os.environ, {"DATABASE_URL": "sqlite://"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_empty_secret_raises(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="")

    def test_whitespace_secret_raises(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_secret_is_not_exposed_in_repr(self) -> None:
        s = _settings()
        self.assertNotIn("config-test-secret", repr(s))
        self.assertEqual(s.JWT_SECRET.get_secret_value(), "config-test-secret")


class TestDefaults(unittest.TestCase):
    """Defaults: two-hour tokens, 'User' default role, uniform login errors."""

    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 120)
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.DEFAULT_ROLE, "User")
        self.assertEqual(s.ADMIN_ROLE, "Admin")
        self.assertFalse(s.AUTH_REVEAL_UNKNOWN_USERNAME)
        self.assertEqual(s.BCRYPT_ROUNDS, 12)


class TestBoundedSettings(unittest.TestCase):
    """Out-of-range or malformed values are rejected at startup."""

    def test_database_url_must_be_postgres_or_sqlite(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://root@localhost/db")

    def test_postgres_url_accepted(self) -> None:
        s = _settings(DATABASE_URL=" postgresql+psycopg2://u:p@localhost/db ")
        self.assertEqual(s.DATABASE_URL, "postgresql+psycopg2://u:p@localhost/db")

    def test_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES="0")
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES="10081")

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS="3")
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS="32")

    def test_blank_default_role_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DEFAULT_ROLE=" ")


class TestCorsOrigins(unittest.TestCase):
    """cors_origins honours CORS_ORIGINS in every environment; unset falls back per APP_ENV."""

    def test_dev_default_allows_any_origin(self) -> None:
        self.assertEqual(_settings(APP_ENV="dev").cors_origins, ["*"])

    def test_prod_default_allows_none(self) -> None:
        self.assertEqual(_settings(APP_ENV="prod").cors_origins, [])

    def test_prod_uses_configured_origins(self) -> None:
        s = _settings(APP_ENV="prod", CORS_ORIGINS='["https://shop.example.com"]')
        self.assertEqual(s.cors_origins, ["https://shop.example.com"])

    def test_dev_explicit_empty_list_is_kept(self) -> None:
        self.assertEqual(_settings(APP_ENV="dev", CORS_ORIGINS="[]").cors_origins, [])


if __name__ == "__main__":
    unittest.main()
