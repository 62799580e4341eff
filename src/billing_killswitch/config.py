"""Runtime settings read from the Cloud Function's environment variables."""
import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.INFO
    simulate_deactivation: bool = False


def load_settings() -> Settings:
    """Read settings from the environment.

    - `LOG_LEVEL`: standard logging level name, defaults to INFO.
    - `SIMULATE_DEACTIVATION`: "true" to log instead of disabling billing.
    """
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    log_level_num = getattr(logging, log_level, logging.INFO)
    if not isinstance(log_level_num, int):
        log_level_num = logging.INFO

    simulate_deactivation = os.getenv("SIMULATE_DEACTIVATION", "false").lower() == "true"

    return Settings(log_level=log_level_num, simulate_deactivation=simulate_deactivation)
