import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import quote

from freshness_warden.errors import ConfigurationError

_PG_KEYS = ("GS_DB_HOST", "GS_DB_NAME", "GS_DB_USER", "GS_DB_PASSWORD")
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./freshness_warden.db"


def _postgres_url_from_env() -> str | None:
    """Assemble a PostgreSQL URL from GS_DB_* variables; None when none of them are set."""
    values = {key: (os.getenv(key) or "").strip() for key in _PG_KEYS}
    if not any(values.values()):
        return None
    missing = [key for key, value in values.items() if not value]
    if missing:
        raise ConfigurationError(f"Missing required environment variable {missing[0]}.")

    port_raw = (os.getenv("GS_DB_PORT") or "").strip()
    port = int(port_raw) if port_raw.isdigit() else 5432
    user = quote(values["GS_DB_USER"], safe="")
    password = quote(values["GS_DB_PASSWORD"], safe="")
    return f"postgresql+asyncpg://{user}:{password}@{values['GS_DB_HOST']}:{port}/{values['GS_DB_NAME']}"


def _positive_int_env(key: str, default: int) -> int:
    raw = (os.getenv(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer.") from None
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive.")
    return value


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Freshness Warden"
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "WARNING"
    default_days: int = 7

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables. DATABASE_URL wins over GS_DB_*."""
        db_url = os.getenv("DATABASE_URL") or _postgres_url_from_env() or DEFAULT_DATABASE_URL
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            database_url=db_url,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            default_days=_positive_int_env("FRESHNESS_DEFAULT_DAYS", cls.default_days),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
