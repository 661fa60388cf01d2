"""
Parsing of Sentry DSNs into the store endpoint and the key pair.

A DSN is a URI of the form::

    {SCHEME}://{PUBLIC_KEY}:{SECRET_KEY}@{HOST}[:{PORT}]/{PROJECT_ID}
"""

from typing import NamedTuple, Optional
from urllib.parse import urlsplit

from sentry_sender.constants import STORE_PATH_TEMPLATE
from sentry_sender.errors import InvalidConfigurationError

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}


class Credentials(NamedTuple):
    endpoint: str
    public_key: str
    secret_key: str


def _parse_project_id(path: str) -> int:
    segments = path.split("/")

    if len(segments) != 2 or segments[0] != "":
        raise InvalidConfigurationError(reason=f"unexpected path {path!r}")

    raw_project_id = segments[1]
    if not (raw_project_id.isascii() and raw_project_id.isdigit()):
        raise InvalidConfigurationError(
            reason=f"project id {raw_project_id!r} is not an integer"
        )

    project_id = int(raw_project_id)
    if project_id <= 0:
        raise InvalidConfigurationError(reason="project id must be positive")

    return project_id


def parse_dsn(dsn: Optional[str]) -> Credentials:
    """
    Parse a DSN into the store endpoint and the key pair.

    Args:
        dsn (Optional[str]): The DSN to parse.

    Returns:
        Credentials: The endpoint, public key and secret key.

    Raises:
        InvalidConfigurationError: If the DSN is missing or malformed.
    """
    if not dsn or not dsn.strip():
        raise InvalidConfigurationError(reason="no DSN configured")

    try:
        parts = urlsplit(dsn.strip())
        port = parts.port
    except ValueError as e:
        raise InvalidConfigurationError(reason=str(e)) from e

    scheme = parts.scheme
    host = parts.hostname

    if not scheme or not host:
        raise InvalidConfigurationError(reason="scheme and host are required")

    if port is None:
        port = DEFAULT_PORTS.get(scheme)
        if port is None:
            raise InvalidConfigurationError(
                reason=f"no port given and no default known for {scheme!r}"
            )

    # netloc keeps the raw userinfo, `username`/`password` would unquote it
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if not sep or not userinfo:
        raise InvalidConfigurationError(reason="missing public and secret key")

    public_key, sep, secret_key = userinfo.partition(":")
    if not sep or not public_key or not secret_key:
        raise InvalidConfigurationError(reason="missing public or secret key")

    project_id = _parse_project_id(parts.path)

    if ":" in host:
        host = f"[{host}]"

    endpoint = f"{scheme}://{host}:{port}" + STORE_PATH_TEMPLATE.format(
        project_id=project_id
    )

    return Credentials(endpoint=endpoint, public_key=public_key, secret_key=secret_key)
