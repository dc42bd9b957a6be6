"""
Contract Validation Module

Модуль для валидации JSON контрактов Staking Energy.
"""

from .validators import (
    Contract,
    contract_errors,
    load_schema,
    validate_energy_config,
    validate_energy_report,
    validate_period,
)

__all__ = [
    "Contract",
    "load_schema",
    "contract_errors",
    "validate_period",
    "validate_energy_config",
    "validate_energy_report",
]
