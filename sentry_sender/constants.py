# -*- coding: utf-8 -*-
import os
from pathlib import Path

DIR_NAME = ".sentry-sender"


def get_user_dir() -> Path:
    """
    Get the user directory for the sentry-sender configuration.

    Returns:
        Path: The user directory path.
    """
    raw_dir = os.getenv("SENTRY_SENDER_CONFIG_PATH")
    if raw_dir:
        return Path(raw_dir).expanduser()

    return Path("~", DIR_NAME).expanduser()


USER_CONFIG_DIR = get_user_dir()
CONFIG_FILE_NAME = "config.ini"
CONFIG = USER_CONFIG_DIR / CONFIG_FILE_NAME

# Sentry protocol
SENTRY_VERSION = 5
SENTRY_AUTH_SCHEME = "Sentry"
SENTRY_AUTH_HEADER = "X-Sentry-Auth"
SENTRY_ERROR_HEADER = "X-Sentry-Error"
STORE_PATH_TEMPLATE = "/api/{project_id}/store/"

# Delivery
MAX_ATTEMPTS = 4
BACKOFF_MULTIPLIER = 2
DEFAULT_POOL_NAME = "sentry_pool"
DEFAULT_WORKERS = 8
DEFAULT_SAMPLE_RATE = 1.0
DEFAULT_MAX_CONNECTIONS = 20
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 10

# Fetch the REQUEST_TIMEOUT (seconds, may be fractional) from the environment, defaulting to 30
REQUEST_TIMEOUT = float(os.getenv("SENTRY_REQUEST_TIMEOUT", 30))

LOG_API_ERROR_PREFIX = "Failed to send Sentry event."

# Exit codes
EXIT_CODE_FAILURE = 1
