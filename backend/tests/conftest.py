"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach real payment or notary services
os.environ.setdefault("STRIPE_SECRET_KEY", "")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "")
os.environ.setdefault("RECEIPT_NOTARY_URL", "")
os.environ.setdefault("IDENTITY_TOKEN_SECRET", "test-identity-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
