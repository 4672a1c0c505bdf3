"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use: test values must be in place before any import
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("WEBHOOK_SECRET", "test-webhook-secret")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("PUBLIC_SITE_URL", "https://casamento.test")
