"""
Pytest configuration for the Hawk Eye catalog tests.
"""

import os
import tempfile
from pathlib import Path

import pytest

# Point the app at a throwaway database before main is imported anywhere
os.environ.setdefault("DATABASE_PATH", str(Path(tempfile.mkdtemp(prefix="hawkeye-test-")) / "catalog.db"))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Register markers and mark the app ready."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test"
    )

    # Mark the service as ready for tests (bypasses warmup middleware)
    # This is needed because TestClient doesn't trigger lifespan events
    from main import set_ready
    set_ready(True)


@pytest.fixture(autouse=True)
def _app_ready():
    """Lifespan shutdown in one test clears the ready flag; restore it for the next."""
    from main import set_ready
    set_ready(True)
    yield


@pytest.fixture
def db_path(tmp_path) -> str:
    """Fully migrated temp database."""
    from hawkeye.db import ensure_schema

    path = str(tmp_path / "catalog.db")
    ensure_schema(path)
    return path


@pytest.fixture
def catalog_repo(db_path):
    from hawkeye.services.catalog_repository import CatalogRepository

    repo = CatalogRepository(db_path)
    yield repo
    repo.close()


def load_fixture(name: str) -> str:
    """Read a text fixture from tests/fixtures."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")
