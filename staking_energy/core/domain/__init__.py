"""
Domain models and value objects.

Contains Period, StakeEvent, AuctionSnapshot, EnergyBreakdown, AllocationResult.
"""

from staking_energy.core.domain.accounts import (
    ZERO_ADDRESS,
    Role,
    is_zero_address,
    validate_account,
)
from staking_energy.core.domain.auction import AuctionSnapshot
from staking_energy.core.domain.energy import (
    AllocationResult,
    ConsumptionPool,
    EnergyBreakdown,
)
from staking_energy.core.domain.period import EnergySource, Period
from staking_energy.core.domain.stake import StakeEvent, TokenClass

__all__ = [
    # Accounts
    "ZERO_ADDRESS",
    "Role",
    "is_zero_address",
    "validate_account",
    # Period model
    "Period",
    "EnergySource",
    # Stake history
    "StakeEvent",
    "TokenClass",
    # Auction
    "AuctionSnapshot",
    # Energy results
    "ConsumptionPool",
    "EnergyBreakdown",
    "AllocationResult",
]
