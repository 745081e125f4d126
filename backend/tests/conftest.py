"""Root conftest — shared test configuration."""

import os

# Must be set before scouting.config.get_settings() is first called (it is cached)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("INTERNAL_API_KEY", "test-internal-key")
os.environ.setdefault("LOG_FORMAT", "text")
