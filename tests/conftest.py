"""Root pytest configuration.

Test Structure:
    tests/
    └── unit/
        ├── domain/            # Pure domain services and aggregates
        ├── application/       # Commands and queries with mocked repositories
        └── infrastructure/    # SQLAlchemy repositories on in-memory SQLite
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from recurra_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.test when present so local overrides do not leak into tests
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Every test sees settings built from the current environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()
