"""
State Cache Module

Tracks the last published address per hostname for change detection.
"""

from .engine import StateCache
from .entry import CacheEntry, CommitResult

__all__ = [
    "StateCache",
    "CacheEntry",
    "CommitResult",
]
