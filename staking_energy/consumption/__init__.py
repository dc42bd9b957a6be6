"""Consumption Allocator — списание энергии: LBA пул первым, остаток в regular."""

from .allocator import ConsumptionAllocator

__all__ = [
    "ConsumptionAllocator",
]
