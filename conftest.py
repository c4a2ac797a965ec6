"""Global pytest configuration."""

import os

# Settings are read on import: SQLite database, no dev identity
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.pop("DEV_TENANT_ID", None)
os.environ.pop("DEV_USER_ID", None)
