from importlib.metadata import PackageNotFoundError, version
import logging
import platform
from typing import Optional


LOG = logging.getLogger(__name__)

CLIENT_NAME = "sentry-sender"


def get_version() -> Optional[str]:
    """
    Get the version of the sentry-sender package.

    Returns:
      Optional[str]: The version if found, otherwise None.
    """
    try:
        return version(CLIENT_NAME)
    except PackageNotFoundError:
        LOG.debug("Unable to get sentry-sender version.")
        return None


def get_client_identifier() -> str:
    """
    Get the client identifier sent as `sentry_client` and `User-Agent`.

    Returns:
      str: The identifier in the format: sentry-sender/{version}
    """
    return f"{CLIENT_NAME}/{get_version() or 'unknown'}"


def get_platform_description() -> str:
    """
    Describe the running interpreter, e.g. ``CPython 3.12.1 (Linux x86_64)``.
    """
    return (
        f"{platform.python_implementation()} {platform.python_version()} "
        f"({platform.system()} {platform.machine() or 'unknown'})"
    )
