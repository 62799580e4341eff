"""Route Python logging to Google Cloud Logging."""
import logging
from typing import Optional

import google.cloud.logging
from google.auth.exceptions import DefaultCredentialsError


def setup_logging(log_level: int = logging.INFO) -> Optional[google.cloud.logging.Client]:
    """Attach a Cloud Logging handler to the root logger.

    Returns the logging client so it can be closed on shutdown, or None when no
    credentials are available and local console logging is used instead.
    """
    try:
        logging_client = google.cloud.logging.Client()
    except (DefaultCredentialsError, OSError) as e:
        logging.basicConfig(level=log_level)
        logging.getLogger().setLevel(log_level)
        logging.warning(f"Cloud Logging unavailable, logging to console: {e}")
        return None

    logging_client.setup_logging(log_level=log_level)
    return logging_client
