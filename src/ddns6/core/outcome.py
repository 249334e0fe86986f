"""
Update Outcomes

Per-host results of one update request and their ordered aggregate.
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OutcomeKind(Enum):
    """What happened to one host during an update request"""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class HostOutcome:
    """Tagged per-host outcome; ``reason`` is set only for failures"""

    kind: OutcomeKind
    reason: Optional[str] = None

    @classmethod
    def updated(cls) -> "HostOutcome":
        return cls(OutcomeKind.UPDATED)

    @classmethod
    def unchanged(cls) -> "HostOutcome":
        return cls(OutcomeKind.UNCHANGED)

    @classmethod
    def failed(cls, reason: str) -> "HostOutcome":
        return cls(OutcomeKind.FAILED, reason)

    @property
    def succeeded(self) -> bool:
        return self.kind is not OutcomeKind.FAILED


@dataclass(frozen=True)
class HostResult:
    """Outcome for one configured host together with its computed address"""

    hostname: str
    address: ipaddress.IPv6Address
    outcome: HostOutcome

    def to_dict(self) -> dict:
        return {
            "hostname": self.hostname,
            "address": str(self.address),
            "outcome": self.outcome.kind.value,
            "reason": self.outcome.reason,
        }


@dataclass
class AggregateResult:
    """Ordered per-host results of a single update request"""

    prefix: ipaddress.IPv6Network
    results: List[HostResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[HostResult]:
        return [r for r in self.results if r.outcome.succeeded]

    @property
    def failed(self) -> List[HostResult]:
        return [r for r in self.results if not r.outcome.succeeded]

    @property
    def updated(self) -> List[HostResult]:
        return [r for r in self.results if r.outcome.kind is OutcomeKind.UPDATED]

    def outcome_for(self, hostname: str) -> Optional[HostOutcome]:
        for result in self.results:
            if result.hostname == hostname:
                return result.outcome
        return None
