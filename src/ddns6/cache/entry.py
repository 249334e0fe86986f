"""
State Cache Entry

One published AAAA address per hostname.
"""

import ipaddress
import time
from dataclasses import dataclass, field
from enum import Enum


class CommitResult(Enum):
    """Outcome of committing a published address to the cache"""

    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass
class CacheEntry:
    """Last address successfully published for a hostname"""

    address: ipaddress.IPv6Address
    updated_at: float = field(default_factory=time.time)
    publish_count: int = 1

    def age(self) -> float:
        """Seconds since the address was last committed"""
        return max(0.0, time.time() - self.updated_at)

    def to_dict(self) -> dict:
        return {
            "address": str(self.address),
            "updated_at": self.updated_at,
            "age_seconds": round(self.age(), 2),
            "publish_count": self.publish_count,
        }
