from typing import NamedTuple, Optional, Union
from pathlib import Path
from sentry_sender.constants import CONFIG
from .log_codes import (
    PROXY_RESOLVED,
    PROXY_NOT_DEFINED,
    PROXY_HOST_EMPTY,
    PROXY_PROTOCOL_INVALID,
)

import configparser

import logging

logger = logging.getLogger(__name__)


DEFAULT_PROXY_PORT: int = 80
DEFAULT_PROXY_SCHEME: str = "http"
PROXY_ALLOWED_PROTOCOLS = ("http", "https")

PROXY_SECTION_NAME = "proxy"
PROXY_PROTOCOL_KEY = "protocol"
PROXY_HOST_KEY = "host"
PROXY_PORT_KEY = "port"


class ProxyConfig(NamedTuple):
    scheme: str
    host: str
    port: int

    def as_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    def as_dict(self) -> dict[str, Union[str, int]]:
        return {
            PROXY_PROTOCOL_KEY: self.scheme,
            PROXY_HOST_KEY: self.host,
            PROXY_PORT_KEY: str(self.port),
        }


def _build_proxy_config(
    host: Optional[str],
    port: Optional[Union[int, str]],
    scheme: Optional[str],
    source: str = "unknown",
) -> Optional[ProxyConfig]:
    """
    Build a proxy configuration, or None when nothing was provided.

    Raises:
        ValueError: If port or protocol were given without a host, or a value
            is invalid.
    """
    if not host or not host.strip():
        if port is not None or scheme is not None:
            logger.error(PROXY_HOST_EMPTY, extra={"source": source})
            raise ValueError(
                f"Proxy host must be provided when using other proxy options in {source}."
            )
        return None

    scheme = (scheme or DEFAULT_PROXY_SCHEME).strip().lower()
    if scheme not in PROXY_ALLOWED_PROTOCOLS:
        logger.error(
            PROXY_PROTOCOL_INVALID, extra={"protocol": scheme, "source": source}
        )
        raise ValueError(f"Invalid proxy protocol: {scheme!r}")

    try:
        port_val = int(port) if port else DEFAULT_PROXY_PORT
    except ValueError:
        raise ValueError("Proxy port must be an integer")

    return ProxyConfig(scheme=scheme, host=host.strip(), port=port_val)


def _proxy_from_config_ini(config_path: Path) -> Optional[ProxyConfig]:
    """
    Retrieve the proxy configuration from the config.ini file.

    Args:
        config_path (Path): The path to the config.ini file.

    Returns:
        Optional[ProxyConfig]: The proxy configuration, or None if not found.
    """
    config = configparser.ConfigParser()
    config_files = config.read(filenames=[config_path])

    if not config_files or not config.has_section(PROXY_SECTION_NAME):
        return None

    section = config[PROXY_SECTION_NAME]

    return _build_proxy_config(
        host=section.get(PROXY_HOST_KEY, None),
        port=section.get(PROXY_PORT_KEY, None),
        scheme=section.get(PROXY_PROTOCOL_KEY, None),
        source="config",
    )


def get_proxy_config(
    host: Optional[str] = None,
    port: Optional[Union[int, str]] = None,
    scheme: Optional[str] = None,
    config_path: Path = CONFIG,
) -> Optional[ProxyConfig]:
    """
    Resolve the effective proxy configuration.

    Resolution order (first non-None wins):
      1. Explicit arguments
      2. config.ini file
      3. No proxy (returns None)

    Raises:
        ValueError: If the proxy configuration is invalid.
    """
    sources = [
        (
            "explicit",
            lambda: _build_proxy_config(
                host=host, port=port, scheme=scheme, source="explicit"
            ),
        ),
        ("config", lambda: _proxy_from_config_ini(config_path=config_path)),
    ]

    for source_name, source_func in sources:
        result = source_func()
        if result is not None:
            extra = {"source": source_name, **result.as_dict()}
            if source_name == "config":
                extra["config_path"] = str(config_path)
            logger.info(PROXY_RESOLVED, extra=extra)
            return result

    logger.debug(
        PROXY_NOT_DEFINED,
        extra={"config_path": str(config_path)},
    )
    return None
