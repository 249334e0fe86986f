"""
Configuration Validators

This module provides validation functions for ddns6 configuration parameters.
"""

import ipaddress
import re
from pathlib import Path
from typing import Optional

HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9_-]{1,63}(?<!-)$")


def validate_bind_address(address: str) -> bool:
    """Validate bind address format."""
    if not address or not isinstance(address, str):
        return False

    try:
        ipaddress.ip_address(address)
        return True
    except ValueError:
        # Allow hostnames such as "localhost"
        return validate_hostname(address)


def validate_file_path(path: Optional[str]) -> bool:
    """Validate optional file path format."""
    if path is None:
        return True

    if not path or not isinstance(path, str):
        return False

    try:
        Path(path)
        return True
    except (TypeError, ValueError):
        return False


def validate_log_level(level: str) -> bool:
    """Validate log level."""
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    return isinstance(level, str) and level.upper() in valid_levels


def validate_positive_float(value: float) -> bool:
    """Validate positive float."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and value > 0
    )


def validate_positive_int(value: int) -> bool:
    """Validate positive integer."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_non_negative_int(value: int) -> bool:
    """Validate non-negative integer."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_port(port: int) -> bool:
    """Validate port number."""
    return validate_positive_int(port) and port <= 65535


def validate_ttl(ttl: int) -> bool:
    """Validate record TTL: 1 means automatic, otherwise 60..86400 seconds."""
    return validate_positive_int(ttl) and (ttl == 1 or 60 <= ttl <= 86400)


def validate_hostname(hostname: str) -> bool:
    """Validate a DNS hostname (labels of letters, digits, '-' and '_')."""
    if not hostname or not isinstance(hostname, str):
        return False

    name = hostname.rstrip(".")
    if not name or len(name) > 253:
        return False

    return all(HOSTNAME_LABEL.match(label) for label in name.split("."))
