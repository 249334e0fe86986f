"""Shared fixtures for the ddns6 test suite."""

import asyncio
from typing import Dict, List, Set, Tuple

import pytest

from ddns6.cache import StateCache
from ddns6.config.schema import HostConfig
from ddns6.core.exceptions import DnsError


class FakeUpdater:
    """In-memory DnsUpdater recording every publish call."""

    def __init__(self):
        self.calls: List[Tuple[str, str, int]] = []
        self.fail: Set[str] = set()
        self.delays: Dict[str, float] = {}
        self.errors: Dict[str, Exception] = {}

    async def publish(self, hostname, address, ttl):
        self.calls.append((hostname, str(address), ttl))

        delay = self.delays.get(hostname)
        if delay:
            await asyncio.sleep(delay)

        if hostname in self.errors:
            raise self.errors[hostname]
        if hostname in self.fail:
            raise DnsError(f"simulated failure for {hostname}")

    def published(self, hostname: str) -> List[str]:
        return [address for name, address, _ in self.calls if name == hostname]


@pytest.fixture
def fake_updater():
    return FakeUpdater()


@pytest.fixture
def state_cache():
    return StateCache()


@pytest.fixture
def hosts():
    return [
        HostConfig(hostname="host1", interface_id="::1"),
        HostConfig(hostname="host2", interface_id="::2"),
    ]
