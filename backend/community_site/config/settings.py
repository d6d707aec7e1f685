"""Cache and logging settings read from the environment.

Values come from process environment variables, with a local `.env`
file loaded first when present.
"""
from dataclasses import dataclass
import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# ============================================================================
# DEFAULTS
# ============================================================================
# A cached ownership decision can be up to this old when served. Operators
# lowering or raising it are trading staleness of "may edit" checks for load.
DEFAULT_OWNERSHIP_TTL_SECONDS = 60
DEFAULT_POST_METADATA_TTL_SECONDS = 30
DEFAULT_PROFILE_TTL_SECONDS = 30
DEFAULT_SWEEP_INTERVAL_SECONDS = 300


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of 1/0, true/false, yes/no, on/off, got '{raw}'")


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class CacheSettings:
    ownership_ttl_seconds: float = DEFAULT_OWNERSHIP_TTL_SECONDS
    post_metadata_ttl_seconds: float = DEFAULT_POST_METADATA_TTL_SECONDS
    profile_ttl_seconds: float = DEFAULT_PROFILE_TTL_SECONDS
    sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS
    sweeper_enabled: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CacheSettings":
        """
        Read settings from the environment.

        Raises:
            ValueError: If a numeric variable is not a positive number
        """
        return cls(
            ownership_ttl_seconds=_positive_float(
                "OWNERSHIP_CACHE_TTL_SECONDS", DEFAULT_OWNERSHIP_TTL_SECONDS
            ),
            post_metadata_ttl_seconds=_positive_float(
                "POST_METADATA_CACHE_TTL_SECONDS", DEFAULT_POST_METADATA_TTL_SECONDS
            ),
            profile_ttl_seconds=_positive_float(
                "PROFILE_CACHE_TTL_SECONDS", DEFAULT_PROFILE_TTL_SECONDS
            ),
            sweep_interval_seconds=_positive_float(
                "CACHE_SWEEP_INTERVAL_SECONDS", DEFAULT_SWEEP_INTERVAL_SECONDS
            ),
            sweeper_enabled=_flag("CACHE_SWEEPER_ENABLED", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Apply the root log level and the default format once at startup."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
