"""
Centralized configuration for the Hawk Eye catalog backend.

All constants are defined here to avoid scattered magic numbers
and enable easy configuration management.
"""

import os
from pathlib import Path
from typing import List, Optional


class Config:
    """Application configuration constants."""

    # === Catalog Import ===
    # The spreadsheet export carries no duration column, so every track
    # gets a placeholder depending on where it came from.
    ALBUM_TRACK_DURATION = "3:45"
    SINGLE_TRACK_DURATION = "3:30"
    DEFAULT_FETCH_TIMEOUT = 30.0

    # === Live Relay ===
    RELAY_PATH = "/ws"
    RELAY_WELCOME_MESSAGE = "Welcome to Hawk Eye Live Stream"

    # === Environment ===
    @staticmethod
    def log_level() -> str:
        """Log level (DEBUG, INFO, WARNING, ERROR)."""
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @staticmethod
    def is_dev() -> bool:
        """Local development mode. Default: False."""
        return os.getenv("DEV_MODE", "false").lower() == "true"

    @staticmethod
    def cors_origins() -> List[str]:
        """Allowed CORS origins, comma separated in CORS_ORIGINS."""
        raw = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    # === Database Persistence ===
    @staticmethod
    def database_path() -> str:
        """Path to SQLite database file.
        Default: hawkeye/data/catalog.db (relative to the package).
        Override with DATABASE_PATH env var for container deployments.
        """
        default = str(Path(__file__).parent / "data" / "catalog.db")
        return os.getenv("DATABASE_PATH", default)

    # === Catalog Import ===
    @staticmethod
    def default_catalog_url() -> Optional[str]:
        """Spreadsheet export URL used by the import CLI when --url is omitted."""
        return os.getenv("CATALOG_CSV_URL") or None

    @staticmethod
    def fetch_timeout() -> float:
        """Timeout in seconds for downloading the catalog export. Default: 30.0."""
        try:
            return float(os.getenv("CATALOG_FETCH_TIMEOUT", str(Config.DEFAULT_FETCH_TIMEOUT)))
        except ValueError:
            return Config.DEFAULT_FETCH_TIMEOUT

    @staticmethod
    def import_workers() -> int:
        """Background threads available to catalog imports. Default: 1."""
        try:
            return max(1, int(os.getenv("CATALOG_IMPORT_WORKERS", "1")))
        except ValueError:
            return 1
