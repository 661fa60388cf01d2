import configparser
from pathlib import Path
from typing import Dict, Optional

import pytest

from sentry_sender.config.proxy import (
    DEFAULT_PROXY_PORT,
    ProxyConfig,
    _build_proxy_config,
    get_proxy_config,
)


@pytest.fixture
def proxy_file_factory(tmp_path: Path):
    def _create_config(proxy_section: Optional[Dict[str, str]] = None) -> Path:
        config = configparser.ConfigParser()
        if proxy_section is not None:
            config["proxy"] = proxy_section

        config_path = tmp_path / "config.ini"
        with open(config_path, "w") as f:
            config.write(f)
        return config_path

    return _create_config


@pytest.mark.unit
class TestBuildProxyConfig:
    """
    Tests for _build_proxy_config.
    """

    def test_nothing_given(self) -> None:
        assert _build_proxy_config(None, None, None) is None

    def test_defaults(self) -> None:
        assert _build_proxy_config(" proxy.local ", None, None) == ProxyConfig(
            scheme="http", host="proxy.local", port=DEFAULT_PROXY_PORT
        )

    def test_port_without_host(self) -> None:
        with pytest.raises(ValueError, match="Proxy host must be provided"):
            _build_proxy_config(None, "8080", None)

    def test_invalid_protocol(self) -> None:
        with pytest.raises(ValueError, match="Invalid proxy protocol"):
            _build_proxy_config("proxy.local", None, "socks5")

    def test_invalid_port(self) -> None:
        with pytest.raises(ValueError, match="must be an integer"):
            _build_proxy_config("proxy.local", "eighty", None)


@pytest.mark.unit
class TestGetProxyConfig:
    """
    Tests for proxy resolution order.
    """

    def test_explicit_wins(self, proxy_file_factory) -> None:
        path = proxy_file_factory({"host": "file.proxy"})

        result = get_proxy_config(host="cli.proxy", config_path=path)

        assert result.host == "cli.proxy"

    def test_config_file_used(self, proxy_file_factory) -> None:
        path = proxy_file_factory({"host": "file.proxy", "protocol": "HTTPS", "port": "443"})

        assert get_proxy_config(config_path=path) == ProxyConfig(
            scheme="https", host="file.proxy", port=443
        )

    def test_no_section(self, proxy_file_factory) -> None:
        assert get_proxy_config(config_path=proxy_file_factory()) is None

    def test_missing_file(self, tmp_path: Path) -> None:
        assert get_proxy_config(config_path=tmp_path / "absent.ini") is None
