"""
Configuration management via environment variables.

This module loads configuration from the .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Gemini credentials are read from GEMINI_KEY_1 .. GEMINI_KEY_10; every key
that is set joins the rotation pool in numeric order.
"""
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
PROJECT_ROOT = Path(__file__).parent.parent.parent
load_dotenv(PROJECT_ROOT / ".env")

MAX_GEMINI_KEYS = 10


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for daily log files
        database_url: Async SQLAlchemy connection string
        gemini_keys: Ordered Gemini API keys used for round-robin rotation
        gemini_model: Gemini model identifier
        gemini_timeout_seconds: Upper bound for a single model call
        frontend_url: Public site URL used for links in prompts
        jwt_secret: Secret used to verify admin bearer tokens
        jwt_algorithm: JWT signing algorithm
        ai_rate_limit_per_minute: Requests per client IP on AI routes
        session_ttl_minutes: Idle time before a chat session is swept
        session_sweep_minutes: Interval between session sweeps
        cors_origins: Allowed CORS origins
        enable_audit_logging: Log every request with status and duration
        auto_create_tables: Create content tables at startup
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    log_dir: Path

    # Database settings
    database_url: str

    # Gemini settings
    gemini_keys: Tuple[str, ...]
    gemini_model: str
    gemini_timeout_seconds: float
    frontend_url: str

    # Auth settings
    jwt_secret: str
    jwt_algorithm: str

    # Safety settings
    ai_rate_limit_per_minute: int
    enable_audit_logging: bool
    cors_origins: Tuple[str, ...]

    # Session settings
    session_ttl_minutes: float
    session_sweep_minutes: float

    auto_create_tables: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _get_bool(key: str, default: str) -> bool:
    return _get_env(key, default).strip().lower() == "true"


def _get_positive_minutes(key: str, default: str) -> float:
    value = float(_get_env(key, default))
    if value <= 0:
        raise ValueError(f"{key} must be greater than 0, got {value:g}")
    return value


def load_gemini_keys() -> Tuple[str, ...]:
    """Collect GEMINI_KEY_1..GEMINI_KEY_10, skipping unset or blank values."""
    keys = []
    for i in range(1, MAX_GEMINI_KEYS + 1):
        key = os.environ.get(f"GEMINI_KEY_{i}", "").strip()
        if key:
            keys.append(key)
    return tuple(keys)


def normalize_database_url(database_url: str) -> str:
    """
    Rewrite a database URL so SQLAlchemy picks an async driver.

    Hosted Postgres providers hand out postgres:// or postgresql:// URLs;
    the asyncio engine needs postgresql+asyncpg://. Prisma-style
    ?schema= parameters are not understood by asyncpg and are dropped.
    """
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("sqlite:///"):
        database_url = database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)

    if "schema=" in database_url:
        database_url = re.sub(r"[?&]schema=[^&]+", "", database_url)
        if "?" not in database_url and "&" in database_url:
            database_url = database_url.replace("&", "?", 1)

    return database_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once; call get_settings.cache_clear() after changing
    the environment (tests do this).

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If required environment variables are missing or out of range
    """
    cors = _get_env("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    log_dir = os.environ.get("LOG_DIR")

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "ACNS-AI"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        log_dir=Path(log_dir) if log_dir else PROJECT_ROOT / "logs",

        # Database
        database_url=normalize_database_url(_get_env("DATABASE_URL")),

        # Gemini
        gemini_keys=load_gemini_keys(),
        gemini_model=_get_env("GEMINI_MODEL", "gemini-2.0-flash"),
        gemini_timeout_seconds=float(_get_env("GEMINI_TIMEOUT_SECONDS", "30")),
        frontend_url=_get_env("FRONTEND_URL", "http://localhost:3000").rstrip("/"),

        # Auth
        jwt_secret=_get_env("JWT_SECRET", "default-secret-change-in-production"),
        jwt_algorithm=_get_env("JWT_ALGORITHM", "HS256"),

        # Safety
        ai_rate_limit_per_minute=int(_get_env("AI_RATE_LIMIT_PER_MINUTE", "20")),
        enable_audit_logging=_get_bool("ENABLE_AUDIT_LOGGING", "true"),
        cors_origins=tuple(o.strip() for o in cors.split(",") if o.strip()),

        # Sessions
        session_ttl_minutes=_get_positive_minutes("SESSION_TTL_MINUTES", "30"),
        session_sweep_minutes=_get_positive_minutes("SESSION_SWEEP_MINUTES", "10"),

        auto_create_tables=_get_bool("AUTO_CREATE_TABLES", "false"),
    )
