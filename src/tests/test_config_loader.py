"""Tests for the configuration loader module."""

import json
import os
import tempfile
from unittest.mock import patch

import pytest
import yaml

from ddns6.config.loader import ConfigLoader, load_config_from_file
from ddns6.config.schema import DDNS6Config
from ddns6.core.exceptions import InvalidInterfaceId

VALID_YAML = """
server:
  bind_address: "127.0.0.1"
  port: 8081

cloudflare:
  api_token: "secret-token"
  zone_id: "zone123"
  ttl: 120

hosts:
  - hostname: "host1.example.com"
    interface_id: "::1"
  - hostname: "host2.example.com"
    interface_id: "a1b2:c3d4:e5f6:7890"
"""


def write_temp(content, suffix=".yaml"):
    with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


@pytest.fixture
def clean_env():
    """Run without any DDNS6_ variables from the outer environment."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("DDNS6_")}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.mark.usefixtures("clean_env")
class TestConfigLoader:
    """Test ConfigLoader functionality."""

    def test_load_yaml_config(self):
        """Test loading configuration from YAML file."""
        config_file = write_temp(VALID_YAML)

        try:
            config = ConfigLoader(config_file).load_config()

            assert isinstance(config, DDNS6Config)
            assert config.server.bind_address == "127.0.0.1"
            assert config.server.port == 8081
            assert config.cloudflare.ttl == 120
            assert [h.hostname for h in config.hosts] == [
                "host1.example.com",
                "host2.example.com",
            ]
            assert config.hosts[1].suffix == 0xA1B2C3D4E5F67890
        finally:
            os.unlink(config_file)

    def test_defaults_merged(self):
        """Test that unspecified settings keep their defaults."""
        config_file = write_temp(VALID_YAML)

        try:
            config = ConfigLoader(config_file).load_config()

            assert config.server.publish_timeout == 30.0
            assert config.cloudflare.max_retries == 2
            assert config.logging.level == "INFO"
        finally:
            os.unlink(config_file)

    def test_load_json_config(self):
        """Test loading configuration from JSON file."""
        json_content = {
            "cloudflare": {"api_token": "t", "zone_id": "z"},
            "hosts": [{"hostname": "a.example.com", "interface_id": "1"}],
        }
        config_file = write_temp(json.dumps(json_content), suffix=".json")

        try:
            config = ConfigLoader(config_file).load_config()

            assert config.cloudflare.api_token == "t"
            assert config.hosts[0].suffix == 1
        finally:
            os.unlink(config_file)

    def test_auto_format_detection(self):
        """Test automatic format detection for files without extension."""
        config_file = write_temp(VALID_YAML, suffix="")

        try:
            config = ConfigLoader(config_file).load_config()
            assert config.server.port == 8081
        finally:
            os.unlink(config_file)

    def test_file_not_found(self):
        """Test handling of non-existent configuration file."""
        loader = ConfigLoader("/non/existent/file.yaml")

        with pytest.raises(FileNotFoundError):
            loader.load_config()

    def test_invalid_yaml_file(self):
        """Test handling of invalid YAML file."""
        config_file = write_temp("invalid: yaml: content: [")

        try:
            with pytest.raises(yaml.YAMLError):
                ConfigLoader(config_file).load_config()
        finally:
            os.unlink(config_file)

    def test_invalid_json_file(self):
        """Test handling of invalid JSON file."""
        config_file = write_temp('{"invalid": json', suffix=".json")

        try:
            with pytest.raises(json.JSONDecodeError):
                ConfigLoader(config_file).load_config()
        finally:
            os.unlink(config_file)

    def test_unrecognized_format_keeps_cause(self):
        """Test that content neither YAML nor JSON can read is reported."""
        config_file = write_temp("invalid: yaml: content: [", suffix=".conf")

        try:
            with pytest.raises(ValueError, match="Unsupported file format") as exc_info:
                ConfigLoader(config_file).load_config()
            assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
        finally:
            os.unlink(config_file)

    def test_invalid_interface_id_fails_fast(self):
        """Test that a bad interface ID prevents loading."""
        config_file = write_temp(
            VALID_YAML.replace('"::1"', '"invalid::xyz::123"')
        )

        try:
            with pytest.raises(InvalidInterfaceId):
                ConfigLoader(config_file).load_config()
        finally:
            os.unlink(config_file)

    @pytest.mark.parametrize("unquoted", ["0x10", "1:2", "010", "1"])
    def test_unquoted_interface_id_rejected(self, unquoted):
        """Test that YAML numbers are refused instead of publishing wrong addresses."""
        config_file = write_temp(VALID_YAML.replace('"::1"', unquoted))

        try:
            with open(config_file, encoding="utf-8") as f:
                assert not isinstance(
                    yaml.safe_load(f)["hosts"][0]["interface_id"], str
                )

            with pytest.raises(InvalidInterfaceId, match="quote it"):
                ConfigLoader(config_file).load_config()
        finally:
            os.unlink(config_file)

    def test_quoted_full_address_interface_id(self):
        config_file = write_temp(VALID_YAML.replace('"::1"', '"fe80::1"'))

        try:
            config = ConfigLoader(config_file).load_config()
            assert config.hosts[0].suffix == 1
        finally:
            os.unlink(config_file)

    def test_missing_hosts(self):
        """Test that a configuration without hosts is rejected."""
        config_file = write_temp(
            "cloudflare:\n  api_token: t\n  zone_id: z\n"
        )

        try:
            with pytest.raises(ValueError, match="At least one host"):
                ConfigLoader(config_file).load_config()
        finally:
            os.unlink(config_file)

    def test_host_entry_missing_key(self):
        """Test a host mapping without an interface ID."""
        config_file = write_temp(
            "cloudflare: {api_token: t, zone_id: z}\nhosts:\n  - hostname: a.example.com\n"
        )

        try:
            with pytest.raises(ValueError, match="requires 'hostname' and 'interface_id'"):
                ConfigLoader(config_file).load_config()
        finally:
            os.unlink(config_file)

    def test_unknown_key(self):
        """Test that misspelled settings are reported."""
        config_file = write_temp(VALID_YAML + "\nlogging:\n  levle: DEBUG\n")

        try:
            with pytest.raises(ValueError, match="Unknown keys in 'logging'"):
                ConfigLoader(config_file).load_config()
        finally:
            os.unlink(config_file)

    def test_config_validation_error(self):
        """Test handling of configuration validation errors."""
        config_file = write_temp(VALID_YAML.replace("port: 8081", "port: 99999"))

        try:
            with pytest.raises(ValueError, match="Invalid port"):
                ConfigLoader(config_file).load_config()
        finally:
            os.unlink(config_file)

    def test_environment_variable_overrides(self):
        """Test environment variable overrides."""
        config_file = write_temp(VALID_YAML)
        env_vars = {
            "DDNS6_CLOUDFLARE_API_TOKEN": "env-token",
            "DDNS6_CLOUDFLARE_ZONE_ID": "12345",
            "DDNS6_SERVER_PORT": "9090",
            "DDNS6_SERVER_PUBLISH_TIMEOUT": "5",
            "DDNS6_LOGGING_LEVEL": "DEBUG",
        }

        try:
            with patch.dict(os.environ, env_vars):
                config = ConfigLoader(config_file).load_config()

            assert config.cloudflare.api_token == "env-token"
            # Numeric-looking strings stay strings
            assert config.cloudflare.zone_id == "12345"
            assert config.server.port == 9090
            assert isinstance(config.server.port, int)
            assert config.server.publish_timeout == 5.0
            assert isinstance(config.server.publish_timeout, float)
            assert config.logging.level == "DEBUG"
        finally:
            os.unlink(config_file)

    def test_environment_supplies_secrets(self):
        """Test a file without credentials completed from the environment."""
        config_file = write_temp(
            "hosts:\n  - hostname: a.example.com\n    interface_id: '::1'\n"
        )
        env_vars = {
            "DDNS6_CLOUDFLARE_API_TOKEN": "t",
            "DDNS6_CLOUDFLARE_ZONE_ID": "z",
        }

        try:
            with patch.dict(os.environ, env_vars):
                config = load_config_from_file(config_file)

            assert config.cloudflare.api_token == "t"
        finally:
            os.unlink(config_file)

    def test_get_config(self):
        """Test getting current configuration."""
        config_file = write_temp(VALID_YAML)

        try:
            loader = ConfigLoader(config_file)
            assert loader.get_config() is None

            config = loader.load_config()
            assert loader.get_config() is config
        finally:
            os.unlink(config_file)
