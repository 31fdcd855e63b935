"""Runtime settings read from the environment (and .env via python-dotenv)."""

import logging
import os
from dataclasses import dataclass

from eyepieceguide.dataset import DEFAULT_DATASET

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    dataset: str  # Local path or http(s) URL
    log_level: str
    http_timeout: float


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, using %s", name, raw, default)
        return default


def load_settings() -> Settings:
    """Read settings from EYEPIECE_* environment variables.

    Call load_dotenv() first if a .env file should be honoured.
    """
    return Settings(
        dataset=os.environ.get("EYEPIECE_DATASET") or str(DEFAULT_DATASET),
        log_level=(os.environ.get("EYEPIECE_LOG_LEVEL") or "INFO").upper(),
        http_timeout=_float_env("EYEPIECE_HTTP_TIMEOUT", 10.0),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
