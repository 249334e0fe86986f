"""
DNS Updater Interface

Contract for publishing one hostname/address pair to a DNS record provider.
"""

import ipaddress
from typing import Protocol, runtime_checkable


@runtime_checkable
class DnsUpdater(Protocol):
    """
    Publishes AAAA records upstream.

    Implementations own authentication, record lookup/creation and their own
    transient-failure retry policy. The orchestrator bounds each call with its
    own timeout regardless.
    """

    async def publish(
        self, hostname: str, address: ipaddress.IPv6Address, ttl: int
    ) -> None:
        """
        Create or update the AAAA record for ``hostname``.

        Raises:
            DnsError: If the record could not be published
        """
        ...
