"""
Configuration helpers for the DrivePark web front-end and backend API.

Routers and services read settings through get_settings() instead of
fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    api_url: str
    web_origin: str
    database_url: str
    jwt_secret: str
    jwt_algorithm: str
    jwt_ttl_seconds: int
    listing_revalidate_seconds: int
    fetch_timeout_seconds: float
    default_locale: str
    locale_redirect: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    jwt_secret = os.getenv("JWT_SECRET", "")
    if not jwt_secret:
        if app_env == "prod":
            raise RuntimeError("JWT_SECRET must be configured in production.")
        jwt_secret = "drivepark-dev-secret"

    return Settings(
        app_env=app_env,
        api_url=os.getenv("API_URL", "http://localhost:4000").rstrip("/"),
        web_origin=os.getenv("WEB_ORIGIN", "http://localhost:3000").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///drivepark.db"),
        jwt_secret=jwt_secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_ttl_seconds=_int(os.getenv("JWT_TTL_SECONDS", "86400"), 86400),
        listing_revalidate_seconds=_int(os.getenv("LISTING_REVALIDATE_SECONDS", "60"), 60),
        fetch_timeout_seconds=_float(os.getenv("FETCH_TIMEOUT_SECONDS", "10"), 10.0),
        default_locale=(os.getenv("DEFAULT_LOCALE") or "en").lower(),
        locale_redirect=_bool(os.getenv("LOCALE_REDIRECT"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
