"""
Client configuration and its resolution from arguments, environment
variables and the config.ini file.
"""

import configparser
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, NamedTuple, Optional, Union

from sentry_sender.constants import (
    CONFIG,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
    DEFAULT_POOL_NAME,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_WORKERS,
    REQUEST_TIMEOUT,
)
from sentry_sender.errors import InvalidConfigurationError
from sentry_sender.hooks import AFTER_SEND, BEFORE_SEND, Hook, load_hook

from .log_codes import SETTING_INVALID, SETTING_RESOLVED, SETTINGS_MISSING_SECTION
from .proxy import ProxyConfig, get_proxy_config

logger = logging.getLogger(__name__)

SETTINGS_SECTION_NAME = "sentry"


@dataclass(frozen=True)
class TransportOptions:
    pool_name: str = DEFAULT_POOL_NAME
    timeout: float = REQUEST_TIMEOUT
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    max_keepalive_connections: int = DEFAULT_MAX_KEEPALIVE_CONNECTIONS
    proxy: Optional[ProxyConfig] = None
    ca_bundle: Optional[Path] = None


@dataclass(frozen=True)
class SenderConfig:
    """
    Immutable snapshot of everything the client needs to send events.

    Hooks are validated when the snapshot is built, so a wrongly shaped hook
    fails at startup with HookShapeError rather than on the first event.
    """

    dsn: Optional[str] = None
    sample_rate: float = DEFAULT_SAMPLE_RATE
    before_send: Hook = None
    after_send: Hook = None
    transport: TransportOptions = field(default_factory=TransportOptions)
    workers: int = DEFAULT_WORKERS
    environment: Optional[str] = None
    release: Optional[str] = None
    server_name: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.sample_rate, bool) or not 0 <= self.sample_rate <= 1:
            raise ValueError(
                f"sample_rate must be a number in [0, 1], got {self.sample_rate!r}"
            )

        if self.workers < 1:
            raise ValueError("workers must be at least 1")

        object.__setattr__(self, "before_send", load_hook(self.before_send, BEFORE_SEND))
        object.__setattr__(self, "after_send", load_hook(self.after_send, AFTER_SEND))

    def with_changes(self, **changes: Any) -> "SenderConfig":
        return replace(self, **changes)


class Setting(NamedTuple):
    env_var: str
    parse: Callable[[str], Any]


SETTINGS: Dict[str, Setting] = {
    "dsn": Setting("SENTRY_DSN", str),
    "sample_rate": Setting("SENTRY_SAMPLE_RATE", float),
    "before_send": Setting("SENTRY_BEFORE_SEND", str),
    "after_send": Setting("SENTRY_AFTER_SEND", str),
    "workers": Setting("SENTRY_WORKERS", int),
    "environment": Setting("SENTRY_ENVIRONMENT", str),
    "release": Setting("SENTRY_RELEASE", str),
    "server_name": Setting("SENTRY_SERVER_NAME", str),
    "pool_name": Setting("SENTRY_POOL_NAME", str),
    "timeout": Setting("SENTRY_REQUEST_TIMEOUT", float),
    "ca_bundle": Setting("SENTRY_CA_BUNDLE", Path),
}

TRANSPORT_SETTINGS = ("pool_name", "timeout", "ca_bundle")


def _read_settings_section(config_path: Path) -> Dict[str, str]:
    config = configparser.ConfigParser()
    config_files = config.read(filenames=[config_path])

    if not config_files:
        return {}

    if not config.has_section(SETTINGS_SECTION_NAME):
        logger.debug(
            SETTINGS_MISSING_SECTION, extra={"config_path": str(config_path)}
        )
        return {}

    return dict(config[SETTINGS_SECTION_NAME])


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _resolve_setting(name: str, explicit: Any, ini_values: Dict[str, str]) -> Any:
    """
    Resolve one setting. Resolution order (first non-blank wins):
      1. Explicit argument
      2. Environment variable
      3. config.ini [sentry] section
    """
    setting = SETTINGS[name]
    sources = [
        ("explicit", lambda: explicit),
        ("environment", lambda: os.getenv(setting.env_var)),
        ("config", lambda: ini_values.get(name)),
    ]

    for source_name, source_func in sources:
        value = source_func()
        if _is_blank(value):
            continue

        if isinstance(value, str):
            try:
                value = setting.parse(value.strip())
            except ValueError as e:
                logger.error(
                    SETTING_INVALID, extra={"setting": name, "source": source_name}
                )
                raise InvalidConfigurationError(
                    reason=str(e), message=f"Invalid value for {name} in {source_name}"
                ) from e

        logger.debug(SETTING_RESOLVED, extra={"setting": name, "source": source_name})
        return value

    return None


def load_config(
    dsn: Optional[str] = None,
    sample_rate: Optional[float] = None,
    before_send: Any = None,
    after_send: Any = None,
    workers: Optional[int] = None,
    environment: Optional[str] = None,
    release: Optional[str] = None,
    server_name: Optional[str] = None,
    pool_name: Optional[str] = None,
    timeout: Optional[float] = None,
    ca_bundle: Optional[Union[str, Path]] = None,
    proxy_host: Optional[str] = None,
    proxy_port: Optional[Union[int, str]] = None,
    proxy_protocol: Optional[str] = None,
    config_path: Path = CONFIG,
) -> SenderConfig:
    """
    Resolve the effective client configuration.

    Every setting is taken from the first source that defines it: explicit
    arguments, then ``SENTRY_*`` environment variables, then the ``[sentry]``
    section of config.ini. Unset settings keep their defaults.

    Returns:
        SenderConfig: The resolved configuration.

    Raises:
        InvalidConfigurationError: If an environment or config.ini value
            cannot be parsed.
        HookShapeError: If a configured hook has an invalid shape.
        ValueError: If a value is out of range or the proxy is invalid.
    """
    explicit = {
        "dsn": dsn,
        "sample_rate": sample_rate,
        "before_send": before_send,
        "after_send": after_send,
        "workers": workers,
        "environment": environment,
        "release": release,
        "server_name": server_name,
        "pool_name": pool_name,
        "timeout": timeout,
        "ca_bundle": ca_bundle,
    }
    ini_values = _read_settings_section(config_path)

    resolved = {
        name: _resolve_setting(name, value, ini_values)
        for name, value in explicit.items()
    }

    transport_kwargs = {
        name: resolved.pop(name)
        for name in TRANSPORT_SETTINGS
        if resolved.get(name) is not None
    }
    for name in TRANSPORT_SETTINGS:
        resolved.pop(name, None)

    transport_kwargs["proxy"] = get_proxy_config(
        host=proxy_host,
        port=proxy_port,
        scheme=proxy_protocol,
        config_path=config_path,
    )

    config_kwargs = {name: value for name, value in resolved.items() if value is not None}

    return SenderConfig(transport=TransportOptions(**transport_kwargs), **config_kwargs)
