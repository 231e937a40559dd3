"""Configuration management.

Values come from the process environment; a ``.env`` file in the working
directory is loaded first so local runs do not need exported variables.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


DEVELOPMENT = "development"
PRODUCTION = "production"


@dataclass(frozen=True)
class Settings:
    """Application configuration."""

    environment: str = PRODUCTION
    catalog_base_url: str = "https://openlibrary.org"
    catalog_timeout: float = 10.0
    cache_ttl_seconds: float = 60.0
    books_file: Path = Path("books.json")
    log_dir: Optional[Path] = Path("Logs")
    log_level: str = "INFO"
    log_retention_days: int = 7

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == DEVELOPMENT

    @classmethod
    def from_env(cls) -> "Settings":
        log_dir = os.getenv("LOG_DIR", "Logs")
        return cls(
            environment=os.getenv("APP_ENV", PRODUCTION),
            catalog_base_url=os.getenv("CATALOG_BASE_URL", "https://openlibrary.org").rstrip("/"),
            catalog_timeout=float(os.getenv("CATALOG_TIMEOUT", "10")),
            cache_ttl_seconds=float(os.getenv("CACHE_TTL_SECONDS", "60")),
            books_file=Path(os.getenv("BOOKS_FILE", "books.json")),
            log_dir=Path(log_dir) if log_dir else None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_retention_days=int(os.getenv("LOG_RETENTION_DAYS", "7")),
        )
