# config/settings.py
"""
╔════════════════════════════════════════════════════════════════════════════╗
║  DataLens - Settings                                                      ║
║  ─────────────────────────────────────────────────────────────────────────  ║
║  ✓ Pydantic v2 Settings                                                  ║
║  ✓ Environment Variable / .env Support                                   ║
║  ✓ Validated Logging & Upload Limits                                     ║
║  ✓ CSV Ingestion Options                                                 ║
╚════════════════════════════════════════════════════════════════════════════╝

Architecture:
```
    Settings
    ├── Application (name, version, environment)
    ├── Logging (level, format, rotation)
    ├── File Storage (logs, reports)
    ├── Ingestion (encoding, delimiters, upload limits)
    └── Reports (JSON layout)
```

Engine semantics (series caps, percentage rounding) are NOT configurable here;
they live in ``config.constants``.

Usage:
```python
    from config.settings import settings

    print(settings.APP_NAME)            # "DataLens"
    print(settings.CSV_DELIMITERS)      # ",;\\t|"
```

Dependencies:
    • pydantic
    • pydantic-settings
    • python-dotenv
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings", "get_settings"]


# Load environment variables
load_dotenv()

# Project root directory
ROOT_DIR = Path(__file__).resolve().parent.parent


# ═══════════════════════════════════════════════════════════════════════════
# Settings Class
# ═══════════════════════════════════════════════════════════════════════════

class Settings(BaseSettings):
    """
    🔧 **Central Configuration**

    Every field can be overridden by an environment variable of the same
    name (case-sensitive) or by an entry in ``.env``.
    """

    # ───────────────────────────────────────────────────────────────────
    # Application
    # ───────────────────────────────────────────────────────────────────

    APP_NAME: str = "DataLens"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Logging configuration
    LOG_JSON_ENABLED: bool = True
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "30 days"
    LOG_CONSOLE_COMPACT: bool = False

    # ───────────────────────────────────────────────────────────────────
    # File Storage
    # ───────────────────────────────────────────────────────────────────

    BASE_PATH: Path = ROOT_DIR
    LOGS_PATH: Path = ROOT_DIR / "logs"
    REPORTS_PATH: Path = ROOT_DIR / "reports" / "exports"

    # ───────────────────────────────────────────────────────────────────
    # Ingestion
    # ───────────────────────────────────────────────────────────────────

    MAX_UPLOAD_SIZE_MB: int = 100
    CSV_ENCODING: str = "utf-8"
    CSV_DELIMITERS: str = ",;\t|"
    CSV_SNIFF_SAMPLE_BYTES: int = 64_000
    ALLOWED_EXTENSIONS: List[str] = Field(default_factory=lambda: [".csv"])

    # ───────────────────────────────────────────────────────────────────
    # Reports
    # ───────────────────────────────────────────────────────────────────

    REPORT_JSON_INDENT: int = 2

    # ───────────────────────────────────────────────────────────────────
    # Development
    # ───────────────────────────────────────────────────────────────────

    TEST_MODE: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # ───────────────────────────────────────────────────────────────────
    # Computed Fields
    # ───────────────────────────────────────────────────────────────────

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == "production"

    @computed_field
    @property
    def max_upload_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    # ───────────────────────────────────────────────────────────────────
    # Field Validators
    # ───────────────────────────────────────────────────────────────────

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = (v or "").upper()
        if normalized not in allowed:
            raise ValueError(
                f"Invalid LOG_LEVEL '{v}'. "
                f"Allowed: {', '.join(sorted(allowed))}"
            )
        return normalized

    @field_validator("LOGS_PATH", "REPORTS_PATH", mode="before")
    @classmethod
    def resolve_directories(cls, v: Path | str) -> Path:
        """Resolve directories (created lazily by their writers)."""
        return Path(v).expanduser().resolve()

    @field_validator("MAX_UPLOAD_SIZE_MB")
    @classmethod
    def validate_max_upload(cls, v: int) -> int:
        """Validate max upload size."""
        if v <= 0 or v > 10_000:
            raise ValueError("MAX_UPLOAD_SIZE_MB must be in range 1..10000")
        return v

    @field_validator("CSV_DELIMITERS")
    @classmethod
    def validate_delimiters(cls, v: str) -> str:
        """Delimiter candidates: distinct single characters, none a quote, letter, digit or newline."""
        if not v:
            raise ValueError("CSV_DELIMITERS must contain at least one character")
        if len(set(v)) != len(v):
            raise ValueError(f"CSV_DELIMITERS has duplicate characters: {v!r}")
        bad = [c for c in v if c.isalnum() or c in "\"'\r\n"]
        if bad:
            raise ValueError(f"CSV_DELIMITERS cannot contain {bad!r}")
        return v

    @field_validator("ALLOWED_EXTENSIONS")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        """Lower-case extensions and make sure each starts with a dot."""
        out = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            out.append(ext if ext.startswith(".") else f".{ext}")
        if not out:
            raise ValueError("ALLOWED_EXTENSIONS must not be empty")
        return out


# ═══════════════════════════════════════════════════════════════════════════
# Global Instance
# ═══════════════════════════════════════════════════════════════════════════

@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
