"""Test environment: must be configured before any app module is imported."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["JWT_SECRET"] = "test-secret-key-for-unit-tests-only-0123456789"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("AUTH_REVEAL_UNKNOWN_USERNAME", None)
