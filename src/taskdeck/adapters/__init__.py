"""Adapters - I/O implementations of ports."""

from .rewards_api import RewardsApiAdapter, AuthenticationError
from .snapshot import SnapshotRepository

__all__ = [
    "RewardsApiAdapter",
    "AuthenticationError",
    "SnapshotRepository",
]
