"""Tests for the configuration schema module."""

import pytest

from ddns6.config.schema import (
    CloudflareConfig,
    DDNS6Config,
    HostConfig,
    LoggingConfig,
    ServerConfig,
)
from ddns6.config.validators import (
    validate_bind_address,
    validate_hostname,
    validate_port,
    validate_positive_int,
    validate_ttl,
)
from ddns6.core.exceptions import InvalidInterfaceId


def make_cloudflare(**kwargs):
    kwargs.setdefault("api_token", "token")
    kwargs.setdefault("zone_id", "zone")
    return CloudflareConfig(**kwargs)


class TestValidationFunctions:
    """Test validation utility functions."""

    def test_validate_bind_address(self):
        """Test bind address validation."""
        assert validate_bind_address("0.0.0.0") is True
        assert validate_bind_address("::") is True
        assert validate_bind_address("localhost") is True
        assert validate_bind_address("") is False
        assert validate_bind_address("bad address") is False

    def test_validate_port(self):
        """Test port number validation."""
        assert validate_port(80) is True
        assert validate_port(65535) is True
        assert validate_port(0) is False
        assert validate_port(65536) is False
        assert validate_port(True) is False

    def test_validate_positive_int(self):
        """Test positive integer validation."""
        assert validate_positive_int(1) is True
        assert validate_positive_int(0) is False
        assert validate_positive_int(-1) is False

    def test_validate_ttl(self):
        """Test TTL validation."""
        assert validate_ttl(1) is True
        assert validate_ttl(60) is True
        assert validate_ttl(300) is True
        assert validate_ttl(86400) is True
        assert validate_ttl(30) is False
        assert validate_ttl(86401) is False

    def test_validate_hostname(self):
        """Test hostname validation."""
        assert validate_hostname("host.example.com") is True
        assert validate_hostname("host.example.com.") is True
        assert validate_hostname("_srv.example.com") is True
        assert validate_hostname("-bad.example.com") is False
        assert validate_hostname("bad..example.com") is False
        assert validate_hostname("") is False


class TestServerConfig:
    """Test ServerConfig validation."""

    def test_defaults(self):
        config = ServerConfig()
        assert config.bind_address == "0.0.0.0"
        assert config.port == 8080
        assert config.publish_timeout == 30.0

    def test_invalid_port(self):
        with pytest.raises(ValueError, match="Invalid port"):
            ServerConfig(port=70000)

    def test_invalid_publish_timeout(self):
        with pytest.raises(ValueError, match="Publish timeout"):
            ServerConfig(publish_timeout=0)


class TestCloudflareConfig:
    """Test CloudflareConfig validation."""

    def test_valid(self):
        config = make_cloudflare(ttl=120)
        assert config.ttl == 120
        assert config.api_base_url.startswith("https://")

    def test_empty_api_token(self):
        with pytest.raises(ValueError, match="api_token cannot be empty"):
            make_cloudflare(api_token="")

    def test_empty_zone_id(self):
        with pytest.raises(ValueError, match="zone_id cannot be empty"):
            make_cloudflare(zone_id="")

    def test_invalid_ttl(self):
        with pytest.raises(ValueError, match="Invalid TTL"):
            make_cloudflare(ttl=5)

    def test_negative_retries(self):
        with pytest.raises(ValueError, match="Max retries"):
            make_cloudflare(max_retries=-1)


class TestHostConfig:
    """Test HostConfig validation."""

    def test_suffix_parsed(self):
        host = HostConfig(hostname="host.example.com", interface_id="::a1b2:c3d4:e5f6:7890")
        assert host.suffix == 0xA1B2C3D4E5F67890

    @pytest.mark.parametrize("interface_id", [1, 16, 62, 1.5, None])
    def test_non_string_interface_id(self, interface_id):
        """Test that a value YAML already converted is not guessed at."""
        with pytest.raises(InvalidInterfaceId, match="quote it"):
            HostConfig(hostname="host.example.com", interface_id=interface_id)

    def test_full_address_interface_id(self):
        host = HostConfig(hostname="host.example.com", interface_id="fe80::1")
        assert host.suffix == 1

    def test_invalid_interface_id(self):
        with pytest.raises(InvalidInterfaceId):
            HostConfig(hostname="host.example.com", interface_id="invalid::xyz::123")

    def test_empty_hostname(self):
        with pytest.raises(ValueError, match="hostname cannot be empty"):
            HostConfig(hostname="", interface_id="::1")

    def test_immutable(self):
        host = HostConfig(hostname="host.example.com", interface_id="::1")
        with pytest.raises(AttributeError):
            host.hostname = "other.example.com"


class TestLoggingConfig:
    """Test LoggingConfig validation."""

    def test_defaults(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.file is None

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            LoggingConfig(format="xml")


class TestDDNS6Config:
    """Test whole-configuration validation."""

    def test_valid(self):
        config = DDNS6Config(
            cloudflare=make_cloudflare(),
            hosts=[
                HostConfig(hostname="device1.example.com", interface_id="::1"),
                HostConfig(hostname="device2.example.com", interface_id="::2"),
            ],
        )

        assert config.get_host("device1.example.com").suffix == 1
        assert config.get_host("nonexistent.example.com") is None

    def test_no_hosts(self):
        with pytest.raises(ValueError, match="At least one host"):
            DDNS6Config(cloudflare=make_cloudflare(), hosts=[])

    def test_duplicate_hostname(self):
        with pytest.raises(ValueError, match="Duplicate hostname"):
            DDNS6Config(
                cloudflare=make_cloudflare(),
                hosts=[
                    HostConfig(hostname="host.example.com", interface_id="::1"),
                    HostConfig(hostname="HOST.example.com.", interface_id="::2"),
                ],
            )
