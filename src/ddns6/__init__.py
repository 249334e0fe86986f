"""
ddns6 - IPv6 dynamic DNS with static interface IDs

Accepts DynDNS2-style prefix updates and publishes prefix + interface ID
AAAA records for every configured host.
"""

__version__ = "0.1.0"
