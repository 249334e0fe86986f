"""
Published Address State Cache

Process-wide map from hostname to the last AAAA address that was successfully
published upstream. Used to suppress redundant publishes; never persisted.
"""

import asyncio
import ipaddress
import logging
import time
from typing import Any, Dict, Optional

from .entry import CacheEntry, CommitResult


class StateCache:
    """Concurrency-safe hostname -> address cache"""

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        # Guards _entries. Never held across a network call.
        self._lock = asyncio.Lock()
        # Serialize peek -> publish -> commit for a single hostname
        self._host_locks: Dict[str, asyncio.Lock] = {}

        self._commits = 0
        self._changes = 0

        self.logger = logging.getLogger(__name__)

    def host_lock(self, hostname: str) -> asyncio.Lock:
        """Get the lock that serializes updates for one hostname.

        Holding it while publishing keeps two in-flight requests for the same
        host from both acting on a stale cached value, without blocking any
        other hostname.
        """
        lock = self._host_locks.get(hostname)
        if lock is None:
            lock = self._host_locks.setdefault(hostname, asyncio.Lock())
        return lock

    async def peek(self, hostname: str) -> Optional[ipaddress.IPv6Address]:
        """Return the cached address for a hostname, if any"""
        async with self._lock:
            entry = self._entries.get(hostname)
            return entry.address if entry else None

    async def try_commit(
        self, hostname: str, candidate: ipaddress.IPv6Address
    ) -> CommitResult:
        """Install an address that has just been published upstream.

        Must only be called after a successful publish of ``candidate``.

        Returns:
            CHANGED if the address differs from the previously cached one
        """
        async with self._lock:
            entry = self._entries.get(hostname)
            self._commits += 1

            if entry is not None and entry.address == candidate:
                entry.updated_at = time.time()
                entry.publish_count += 1
                return CommitResult.UNCHANGED

            publish_count = entry.publish_count + 1 if entry else 1
            self._entries[hostname] = CacheEntry(
                address=candidate, publish_count=publish_count
            )
            self._changes += 1

        self.logger.debug(f"Cached address for {hostname}: {candidate}")
        return CommitResult.CHANGED

    async def remove(self, hostname: str) -> bool:
        """Forget a hostname so the next request republishes it"""
        async with self._lock:
            return self._entries.pop(hostname, None) is not None

    async def snapshot(self) -> Dict[str, CacheEntry]:
        """Copy of all cache entries keyed by hostname"""
        async with self._lock:
            return {
                hostname: CacheEntry(
                    address=entry.address,
                    updated_at=entry.updated_at,
                    publish_count=entry.publish_count,
                )
                for hostname, entry in self._entries.items()
            }

    async def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics"""
        async with self._lock:
            return {
                "entries": len(self._entries),
                "commits": self._commits,
                "changes": self._changes,
            }
