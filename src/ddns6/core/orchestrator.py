"""
Update Orchestrator

Drives one DynDNS2 update request across every configured host: combines the
client prefix with each interface ID, skips hosts whose published address is
already current, publishes the rest and records a per-host outcome. A failure
on one host never stops the others.
"""

import asyncio
import ipaddress
from typing import List, Sequence

from ..cache import CommitResult, StateCache
from ..config.schema import HostConfig
from ..dns_logging import get_logger, log_exception
from ..updater.base import DnsUpdater
from .address import combine, parse_prefix
from .exceptions import DnsError
from .outcome import AggregateResult, HostOutcome, HostResult


class Orchestrator:
    """Request-to-publish pipeline for all configured hosts"""

    def __init__(
        self,
        hosts: Sequence[HostConfig],
        cache: StateCache,
        updater: DnsUpdater,
        ttl: int = 300,
        publish_timeout: float = 30.0,
    ):
        """
        Initialize the orchestrator

        Args:
            hosts: Ordered host mappings, fixed for the process lifetime
            cache: Shared published-address cache
            updater: Publisher for AAAA records
            ttl: TTL passed to every publish
            publish_timeout: Upper bound for a single publish in seconds
        """
        self.hosts: List[HostConfig] = list(hosts)
        self.cache = cache
        self.updater = updater
        self.ttl = ttl
        self.publish_timeout = publish_timeout

        self.logger = get_logger("orchestrator")

    async def handle_update(self, prefix_text: str) -> AggregateResult:
        """Process one update request.

        Raises:
            InvalidAddress: If the prefix cannot be parsed. No host is touched.
        """
        prefix = parse_prefix(prefix_text)

        self.logger.info(
            "Extracted prefix, updating hosts",
            prefix=str(prefix),
            hosts=len(self.hosts),
        )

        result = AggregateResult(prefix=prefix)
        for host in self.hosts:
            result.results.append(await self._process_host(prefix, host))

        return result

    async def _process_host(
        self, prefix: ipaddress.IPv6Network, host: HostConfig
    ) -> HostResult:
        """Compute, compare, publish and commit for a single host"""
        candidate = combine(prefix, host.suffix)

        self.logger.debug(
            "Computed address",
            hostname=host.hostname,
            address=str(candidate),
            interface_id=host.interface_id,
        )

        async with self.cache.host_lock(host.hostname):
            previous = await self.cache.peek(host.hostname)
            if previous == candidate:
                self.logger.info(
                    "Address has not changed, skipping",
                    hostname=host.hostname,
                    address=str(candidate),
                )
                return HostResult(host.hostname, candidate, HostOutcome.unchanged())

            outcome = await self._publish(host.hostname, candidate)
            if outcome.succeeded:
                commit = await self.cache.try_commit(host.hostname, candidate)
                self.logger.info(
                    "Successfully updated host",
                    hostname=host.hostname,
                    address=str(candidate),
                    previous=str(previous) if previous else None,
                    changed=commit is CommitResult.CHANGED,
                )

        return HostResult(host.hostname, candidate, outcome)

    async def _publish(
        self, hostname: str, candidate: ipaddress.IPv6Address
    ) -> HostOutcome:
        """Publish under the per-host timeout and map errors to an outcome"""
        try:
            await asyncio.wait_for(
                self.updater.publish(hostname, candidate, self.ttl),
                timeout=self.publish_timeout,
            )
        except asyncio.TimeoutError:
            reason = f"timed out after {self.publish_timeout:g}s"
            self.logger.error(
                "Publish timed out",
                hostname=hostname,
                address=str(candidate),
                reason=reason,
            )
            return HostOutcome.failed(reason)
        except DnsError as e:
            self.logger.error(
                "Failed to update DNS record",
                hostname=hostname,
                address=str(candidate),
                reason=str(e),
            )
            return HostOutcome.failed(str(e))
        except Exception as e:
            log_exception(
                self.logger,
                "Unexpected error while publishing",
                e,
                hostname=hostname,
                address=str(candidate),
            )
            return HostOutcome.failed(f"{type(e).__name__}: {e}")

        return HostOutcome.updated()
