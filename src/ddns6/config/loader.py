"""Configuration loader for ddns6.

This module handles loading configuration from files and environment variables,
with validation. Configuration is loaded once at startup.
"""

import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .schema import (
    CloudflareConfig,
    DDNS6Config,
    HostConfig,
    LoggingConfig,
    ServerConfig,
)

ENV_PREFIX = "DDNS6_"

SECTIONS = {
    "server": ServerConfig,
    "cloudflare": CloudflareConfig,
    "logging": LoggingConfig,
}


class ConfigLoader:
    """Configuration loader."""

    def __init__(self, config_file: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_file: Path to configuration file (YAML or JSON)
        """
        self.config_file = config_file
        self._config: Optional[DDNS6Config] = None

    def load_config(self) -> DDNS6Config:
        """Load configuration from file and environment variables.

        Returns:
            Loaded and validated configuration

        Raises:
            FileNotFoundError: If config file is specified but not found
            ValueError: If configuration is invalid
            InvalidInterfaceId: If a host interface ID cannot be parsed
            yaml.YAMLError: If YAML parsing fails
            json.JSONDecodeError: If JSON parsing fails
        """
        # Start with default configuration
        config_dict = self._get_default_config_dict()

        # Load from file if specified
        if self.config_file:
            file_config = self._load_from_file(self.config_file)
            config_dict = self._merge_configs(config_dict, file_config)

        # Apply environment variable overrides
        config_dict = self._apply_env_overrides(config_dict)

        # Create and validate configuration
        self._config = self._dict_to_config(config_dict)

        return self._config

    def get_config(self) -> Optional[DDNS6Config]:
        """Get current configuration."""
        return self._config

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Read the raw config mapping; an empty document yields ``{}``."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, "r", encoding="utf-8") as f:
            content = f.read()

        if path.suffix.lower() in [".yaml", ".yml"]:
            result = yaml.safe_load(content)
        elif path.suffix.lower() == ".json":
            result = json.loads(content)
        else:
            # unknown extension
            try:
                result = yaml.safe_load(content)
            except yaml.YAMLError:
                try:
                    result = json.loads(content)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Unsupported file format: {file_path}") from e

        return result if isinstance(result, dict) else {}

    def _get_default_config_dict(self) -> Dict[str, Any]:
        """Get default configuration as dictionary."""
        config_dict: Dict[str, Any] = {
            section: self._section_defaults(cls) for section, cls in SECTIONS.items()
        }
        config_dict["hosts"] = []
        return config_dict

    @staticmethod
    def _section_defaults(cls: type) -> Dict[str, Any]:
        """Collect the declared defaults of a section dataclass."""
        defaults = {}
        for f in dataclasses.fields(cls):
            if f.default is not dataclasses.MISSING:
                defaults[f.name] = f.default
            elif f.default_factory is not dataclasses.MISSING:
                defaults[f.name] = f.default_factory()
        return defaults

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> DDNS6Config:
        """Convert dictionary to configuration object.

        Args:
            config_dict: Configuration dictionary

        Returns:
            Configuration object

        Raises:
            ValueError: If configuration is invalid
        """
        sections = {}
        for section, cls in SECTIONS.items():
            values = config_dict.get(section) or {}
            if not isinstance(values, dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")

            unknown = set(values) - {f.name for f in dataclasses.fields(cls)}
            if unknown:
                raise ValueError(
                    f"Unknown keys in '{section}': {', '.join(sorted(unknown))}"
                )
            sections[section] = cls(**values)

        return DDNS6Config(
            server=sections["server"],
            cloudflare=sections["cloudflare"],
            logging=sections["logging"],
            hosts=self._parse_hosts(config_dict.get("hosts")),
        )

    def _parse_hosts(self, hosts: Any) -> List[HostConfig]:
        """Build the ordered host list from its raw form."""
        if hosts is None:
            return []

        if not isinstance(hosts, list):
            raise ValueError("'hosts' must be a list of host mappings")

        result = []
        for index, host in enumerate(hosts):
            if not isinstance(host, dict):
                raise ValueError(f"Host entry {index} must be a mapping")

            if "hostname" not in host or "interface_id" not in host:
                raise ValueError(
                    f"Host entry {index} requires 'hostname' and 'interface_id'"
                )

            result.append(
                HostConfig(hostname=host["hostname"], interface_id=host["interface_id"])
            )

        return result

    def _merge_configs(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep-merge ``override`` into a copy of ``base``; lists are replaced whole."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration.

        Environment variables use the format DDNS6_<SECTION>_<KEY>
        For example: DDNS6_CLOUDFLARE_API_TOKEN=secret

        Args:
            config_dict: Base configuration dictionary

        Returns:
            Configuration dictionary with environment overrides applied
        """
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            # Parse environment variable key
            key_parts = env_key[len(ENV_PREFIX) :].lower().split("_")
            if len(key_parts) < 2:
                continue

            section = key_parts[0]
            config_key = "_".join(key_parts[1:])

            if section not in SECTIONS or not isinstance(
                config_dict.get(section), dict
            ):
                continue

            default = self._section_defaults(SECTIONS[section]).get(config_key)
            config_dict[section][config_key] = self._convert_env_value(
                env_value, default
            )

        return config_dict

    def _convert_env_value(self, value: str, default: Any = None) -> Any:
        """Convert environment variable value to the type of its default.

        Args:
            value: Environment variable value as string
            default: Declared default of the target field

        Returns:
            Converted value
        """
        if isinstance(default, bool):
            if value.lower() in ("true", "yes", "1", "on"):
                return True
            elif value.lower() in ("false", "no", "0", "off"):
                return False
            return value

        if isinstance(default, int):
            try:
                return int(value)
            except ValueError:
                return value

        if isinstance(default, float):
            try:
                return float(value)
            except ValueError:
                return value

        # Strings, and optional fields without a typed default
        return value


def load_config_from_file(config_file: Optional[str] = None) -> DDNS6Config:
    """Convenience function to load configuration.

    Args:
        config_file: Path to configuration file

    Returns:
        Loaded configuration
    """
    return ConfigLoader(config_file).load_config()
