"""
DNS Updater Module

Publishers that push AAAA records to the upstream DNS provider.
"""

from .base import DnsUpdater
from .cloudflare import CloudflareUpdater

__all__ = ["DnsUpdater", "CloudflareUpdater"]
