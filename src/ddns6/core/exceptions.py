"""
ddns6 Exceptions

Exception classes shared by the update pipeline, the configuration layer and
the DNS provider client.
"""


class DDNS6Error(Exception):
    """Base class for all ddns6 errors."""


class InvalidAddress(DDNS6Error, ValueError):
    """
    Raised when a client-supplied prefix is not a valid IPv6 literal.

    This is a request-level error: no per-host work is attempted.
    """


class InvalidInterfaceId(DDNS6Error, ValueError):
    """
    Raised when a configured interface ID cannot be parsed.

    Interface IDs are static configuration, so this prevents startup.
    """


class DnsError(DDNS6Error):
    """Raised by a DnsUpdater when publishing a record fails."""
