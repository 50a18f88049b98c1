"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/           # Fast tests; sessions are mocks
    ├── integration/    # Tests against SQLite files via aiosqlite
    └── shared/         # Shared fixtures and utilities

Settings are read fresh for every test so environment overrides made with
``monkeypatch`` do not leak between tests.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from custom_identity_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")


@pytest.fixture(autouse=True)
def _fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()
