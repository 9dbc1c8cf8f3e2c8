from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Staffing Records API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    api_prefix: str = ""
    cors_origins: list[str] = ["*"]

    # Document store: "memory", "firebase" or "sql"
    store_backend: str = "memory"

    # Firebase Realtime Database
    firebase_credentials_file: str = "serviceAccountKey.json"
    firebase_database_url: str = ""

    # SQL document table (used when store_backend == "sql")
    database_url: str = "sqlite:///./staffing.db"

    # Record bookkeeping
    max_allocation_attempts: int = 10
    default_user_email: str = "current_user@example.com"

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL statements
    log_level_http: str = "WARNING"          # urllib3 / google.auth (Firebase transport)
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_store: str = "INFO"            # document store adapters

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
