"""
Centralized configuration module for application-wide settings.

Values are read from environment variables once at import time. A local
.env file is loaded first when DATABASE_URL is not already defined by the
environment, so deployments keep full control over their settings.
"""

import logging
import os
from datetime import datetime
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

if not os.getenv("DATABASE_URL"):
    load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    """Parse a boolean environment variable ("true", "1", "yes" are truthy)."""
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        logger.warning(
            f"Invalid integer for {name}, falling back to {default}",
            extra={"context": {"variable": name, "value": os.getenv(name)}},
        )
        return default


# ===========================
# Database Configuration
# ===========================

DEFAULT_DATABASE_URL = "sqlite:///./parceldesk.db"


def get_database_url() -> str:
    """
    Get the SQLAlchemy database URL.

    Read on every call so tests can point the engine at a different
    database after this module has been imported.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL
            Default: 'sqlite:///./parceldesk.db'
    """
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'Asia/Seoul', 'UTC')
            Default: 'UTC'

    The timezone decides which calendar day a delivery's update timestamp
    falls on, and therefore how daily and monthly rollups group rows.
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


# Global timezone instance - initialized once at import time
APP_TZ = get_app_timezone()


def local_now() -> datetime:
    """Current wall-clock time in APP_TZ, without tzinfo, as stored in the database."""
    return datetime.now(APP_TZ).replace(tzinfo=None)


def log_timezone_config():
    """
    Log the active timezone configuration.

    Should be called during application startup to provide visibility
    into the timezone being used for date/time operations.
    """
    logger.info(
        "Timezone configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "tz_env_var": os.getenv("TZ", "UTC"),
            }
        },
    )


# ===========================
# Runtime Configuration
# ===========================

FLASK_ENV = os.getenv("FLASK_ENV", "development")
IS_PRODUCTION = FLASK_ENV == "production"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO" if IS_PRODUCTION else "DEBUG")
LOG_TO_FILE = _env_flag("LOG_TO_FILE", "0")
SQL_ECHO = _env_flag("SQL_ECHO", "0")

# Recipient search never returns more rows than this
SEARCH_RESULT_LIMIT = _env_int("SEARCH_RESULT_LIMIT", 10)

RATE_LIMIT_ENABLED = _env_flag("RATE_LIMIT_ENABLED", "1")
LIMITER_STORAGE_URI = os.getenv("LIMITER_STORAGE_URI", "memory://")

PORT = _env_int("PORT", 5000)


def is_test_mode() -> bool:
    """Check if we're running in test mode (TESTING env var set by conftest.py)."""
    return _env_flag("TESTING", "")
