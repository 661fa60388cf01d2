from .proxy import ProxyConfig, get_proxy_config
from .settings import SenderConfig, TransportOptions, load_config
from .tls import get_verify_context

__all__ = [
    "ProxyConfig",
    "SenderConfig",
    "TransportOptions",
    "get_proxy_config",
    "get_verify_context",
    "load_config",
]
