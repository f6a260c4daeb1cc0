"""
Configuration helpers for the Conceptos backend.

Routers/services/repositories read settings from here instead of fetching
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

PROJECT_DIR = Path(__file__).resolve().parents[2]

STORAGE_BACKENDS = ("json", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    data_file: Path
    database_url: str
    log_level: str
    host: str
    port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    default_db = PROJECT_DIR / "database" / "conceptos.db"
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "json").strip().lower(),
        data_file=Path(os.getenv("DATA_FILE") or PROJECT_DIR / "data" / "conceptos.json"),
        database_url=os.getenv("DATABASE_URL", f"sqlite:///{default_db.as_posix()}").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
    )
