import os
import ssl
from pathlib import Path
from ssl import SSLContext
from typing import Optional, Union

import certifi

from .log_codes import TLS_CA_BUNDLE_RESOLVED, TLS_DEFAULT_BUNDLE

import logging

logger = logging.getLogger(__name__)


def _normalize_bundle_path(path: Union[str, Path]) -> Path:
    """
    Validate and normalize a CA bundle path.

    Raises:
        ValueError: If the path is invalid.
    """
    if not path:
        raise ValueError("CA bundle path is empty")

    path = Path(path).expanduser().resolve()

    if not path.exists():
        raise ValueError(f"CA bundle path does not exist: {path}")

    if not path.is_file():
        raise ValueError(f"CA bundle path is not a file: {path}")

    if not os.access(path, os.R_OK):
        raise ValueError(f"CA bundle is not readable: {path}")

    logger.debug(TLS_CA_BUNDLE_RESOLVED, extra={"path": str(path)})
    return path


def get_verify_context(ca_bundle: Optional[Union[str, Path]] = None) -> SSLContext:
    """
    Build the certificate verification context for the transport.

    Args:
        ca_bundle: Custom CA bundle, the certifi bundle is used when omitted.

    Returns:
        SSLContext: The verification context.

    Raises:
        ValueError: If the CA bundle path is invalid.
    """
    if ca_bundle:
        return ssl.create_default_context(cafile=_normalize_bundle_path(ca_bundle))

    logger.debug(TLS_DEFAULT_BUNDLE, extra={"path": certifi.where()})
    return ssl.create_default_context(cafile=certifi.where())
