"""Period Registry — производственные циклы с собственными rates."""

from .period_registry import NO_PERIOD_ID, PeriodRegistry

__all__ = [
    "NO_PERIOD_ID",
    "PeriodRegistry",
]
