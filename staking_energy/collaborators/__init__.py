"""
External collaborators: протоколы и in-memory реализации.
"""

from .in_memory import (
    InMemoryAuctionOracle,
    InMemoryCounterStore,
    InMemoryHistoryProvider,
    RoleRegistry,
)
from .interfaces import AccessControl, AuctionOracle, CounterStore, HistoryProvider

__all__ = [
    # Protocols
    "HistoryProvider",
    "AuctionOracle",
    "CounterStore",
    "AccessControl",
    # In-memory implementations
    "InMemoryHistoryProvider",
    "InMemoryAuctionOracle",
    "InMemoryCounterStore",
    "RoleRegistry",
]
