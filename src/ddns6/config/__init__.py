"""
ddns6 Configuration Module
"""

from .loader import ConfigLoader, load_config_from_file
from .schema import (
    CloudflareConfig,
    DDNS6Config,
    HostConfig,
    LoggingConfig,
    ServerConfig,
)

__all__ = [
    "ConfigLoader",
    "load_config_from_file",
    "DDNS6Config",
    "ServerConfig",
    "CloudflareConfig",
    "HostConfig",
    "LoggingConfig",
]
