"""Root conftest - shared test configuration."""

import os

# Tests never need a real database server or deployment secret
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault(
    "TOKEN_SYMMETRIC_KEY", "test-key-test-key-test-key-test-key",
)
