"""
Staking Energy — Period Registry & Energy Accrual Engine.

Начисление "энергии" за стейкинг primary/LP токенов и за claimable
ликвидность LBA внутри производственных циклов (Periods), учёт потребления
по двум независимым пулам (regular, LBA) с приоритетом LBA.
"""

from staking_energy.manager import EnergyManager

__all__ = ["EnergyManager"]
