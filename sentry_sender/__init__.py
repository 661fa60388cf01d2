from .api import (
    capture_exception,
    capture_message,
    get_client,
    init,
    resolve_credentials,
    send_event,
    shutdown,
)
from .auth import authorization_header
from .client import Client
from .config import SenderConfig, TransportOptions, load_config
from .dsn import Credentials, parse_dsn
from .models import DispatchMode, Event, SendResult, SendStatus

__all__ = [
    "Client",
    "Credentials",
    "DispatchMode",
    "Event",
    "SendResult",
    "SendStatus",
    "SenderConfig",
    "TransportOptions",
    "authorization_header",
    "capture_exception",
    "capture_message",
    "get_client",
    "init",
    "load_config",
    "parse_dsn",
    "resolve_credentials",
    "send_event",
    "shutdown",
]
