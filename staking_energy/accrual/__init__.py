"""Accrual Engine — интеграл стейка по времени внутри периода."""

from .engine import AccrualEngine

__all__ = [
    "AccrualEngine",
]
