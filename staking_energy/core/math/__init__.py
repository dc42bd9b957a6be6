"""
Core math modules для Staking Energy

Целочисленные примитивы и интеграл баланса по времени.
"""

# Fixed-point
from staking_energy.core.math.fixed_point import (
    RATE_SCALE,
    SECONDS_PER_DAY,
    is_strict_int,
    saturating_sub,
    scale_energy,
    validate_non_negative_int,
)

# Time-weighted integral
from staking_energy.core.math.time_weighted import (
    Observation,
    clamp_timestamp,
    constant_balance_integral,
    integrate_deltas,
    integrate_snapshots,
    is_time_ordered,
    last_balance,
    snapshots_to_deltas,
)

__all__ = [
    # Fixed-point — Constants
    "RATE_SCALE",
    "SECONDS_PER_DAY",
    # Fixed-point — Functions
    "is_strict_int",
    "saturating_sub",
    "scale_energy",
    "validate_non_negative_int",
    # Time-weighted — Types
    "Observation",
    # Time-weighted — Functions
    "clamp_timestamp",
    "constant_balance_integral",
    "integrate_deltas",
    "integrate_snapshots",
    "is_time_ordered",
    "last_balance",
    "snapshots_to_deltas",
]
