"""
ddns6 Configuration Schema

Configuration schema for the HTTP listener, the Cloudflare provider, logging,
and the static host to interface ID mappings.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.address import parse_suffix
from ..core.exceptions import InvalidInterfaceId
from .validators import (
    validate_bind_address,
    validate_file_path,
    validate_hostname,
    validate_log_level,
    validate_non_negative_int,
    validate_port,
    validate_positive_float,
    validate_positive_int,
    validate_ttl,
)

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"


@dataclass
class ServerConfig:
    """HTTP server configuration section."""

    bind_address: str = "0.0.0.0"
    port: int = 8080
    publish_timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate server configuration."""
        if not validate_bind_address(self.bind_address):
            raise ValueError(f"Invalid bind address: {self.bind_address}")

        if not validate_port(self.port):
            raise ValueError(f"Invalid port: {self.port}")

        if not validate_positive_float(self.publish_timeout):
            raise ValueError(
                f"Publish timeout must be positive: {self.publish_timeout}"
            )


@dataclass
class CloudflareConfig:
    """Cloudflare provider configuration section."""

    api_token: str = ""
    zone_id: str = ""
    ttl: int = 300
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 10.0
    max_retries: int = 2
    retry_delay: float = 0.5

    def __post_init__(self) -> None:
        """Validate Cloudflare configuration."""
        if not self.api_token:
            raise ValueError("cloudflare.api_token cannot be empty")

        if not self.zone_id:
            raise ValueError("cloudflare.zone_id cannot be empty")

        if not validate_ttl(self.ttl):
            raise ValueError(f"Invalid TTL: {self.ttl}")

        if not self.api_base_url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid API base URL: {self.api_base_url}")

        if not validate_positive_float(self.request_timeout):
            raise ValueError(
                f"Request timeout must be positive: {self.request_timeout}"
            )

        if not validate_non_negative_int(self.max_retries):
            raise ValueError(
                f"Max retries must be non-negative: {self.max_retries}"
            )

        if not validate_positive_float(self.retry_delay):
            raise ValueError(f"Retry delay must be positive: {self.retry_delay}")


@dataclass(frozen=True)
class HostConfig:
    """Static mapping of a hostname to its interface ID."""

    hostname: str
    interface_id: str
    suffix: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the hostname and parse the interface ID once."""
        if not self.hostname:
            raise ValueError("hostname cannot be empty")

        if not validate_hostname(self.hostname):
            raise ValueError(f"Invalid hostname: {self.hostname}")

        # YAML has already reinterpreted unquoted values such as 0x10 or 1:2
        if not isinstance(self.interface_id, str):
            raise InvalidInterfaceId(
                f"Interface ID for {self.hostname} must be a string, got "
                f"{self.interface_id!r}; quote it in the configuration"
            )

        object.__setattr__(self, "suffix", parse_suffix(self.interface_id))


@dataclass
class LoggingConfig:
    """Logging configuration section."""

    level: str = "INFO"
    format: str = "console"
    file: Optional[str] = None
    max_size_mb: int = 10
    backup_count: int = 3

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        if not validate_log_level(self.level):
            raise ValueError(f"Invalid log level: {self.level}")

        if self.format not in ["console", "json"]:
            raise ValueError(f"Invalid log format: {self.format}")

        if not validate_file_path(self.file):
            raise ValueError(f"Invalid log file path: {self.file}")

        if not validate_positive_int(self.max_size_mb):
            raise ValueError(f"Max size MB must be positive: {self.max_size_mb}")

        if not validate_positive_int(self.backup_count):
            raise ValueError(f"Backup count must be positive: {self.backup_count}")


@dataclass
class DDNS6Config:
    """Main ddns6 configuration."""

    cloudflare: CloudflareConfig
    hosts: List[HostConfig]
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        """Validate the entire configuration."""
        if not self.hosts:
            raise ValueError("At least one host mapping must be configured")

        seen = set()
        for host in self.hosts:
            key = host.hostname.rstrip(".").lower()
            if key in seen:
                raise ValueError(f"Duplicate hostname: {host.hostname}")
            seen.add(key)

    def get_host(self, hostname: str) -> Optional[HostConfig]:
        """Find the host mapping for a hostname."""
        for host in self.hosts:
            if host.hostname == hostname:
                return host
        return None
