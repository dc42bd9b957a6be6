"""
EnergyConfig — конфигурация Energy Engine

Фиксируется при создании движка и не меняется в процессе работы.
Загрузка из dict/JSON проходит через контракт energy_config.json.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from staking_energy.core.contracts import Contract, contract_errors, validate_energy_config
from staking_energy.core.domain.period import Period
from staking_energy.core.errors import InvalidInput
from staking_energy.core.math.fixed_point import SECONDS_PER_DAY, is_strict_int


@dataclass(frozen=True)
class EnergyConfig:
    """Конфигурация начисления энергии.

    - seconds_per_day: длина "суток", в которых выражены rates периодов
    - lba_accrual_start_time: момент, с которого начисляется LBA энергия.
      None — с начала каждого периода (эквивалентно началу самого раннего
      периода). Позволяет запустить LBA-часы позже первого периода.
    """
    seconds_per_day: int = SECONDS_PER_DAY
    lba_accrual_start_time: Optional[int] = None

    def __post_init__(self):
        if not is_strict_int(self.seconds_per_day) or self.seconds_per_day <= 0:
            raise ValueError(
                f"seconds_per_day must be a positive int, got {self.seconds_per_day!r}"
            )
        if self.lba_accrual_start_time is not None and (
            not is_strict_int(self.lba_accrual_start_time)
            or self.lba_accrual_start_time < 0
        ):
            raise ValueError(
                "lba_accrual_start_time must be a non-negative int or None, "
                f"got {self.lba_accrual_start_time!r}"
            )

    def lba_window_start(self, period_start: int) -> int:
        """Начало LBA окна: max(period_start, lba_accrual_start_time)."""
        if self.lba_accrual_start_time is None:
            return period_start
        return max(period_start, self.lba_accrual_start_time)


def load_energy_config(data: Mapping[str, Any]) -> EnergyConfig:
    """
    Загрузка конфигурации из dict.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют energy_config.json
    """
    payload: Dict[str, Any] = dict(data)
    validate_energy_config(payload)
    return EnergyConfig(**payload)


def load_periods(data: Iterable[Mapping[str, Any]]) -> List[Period]:
    """
    Загрузка списка периодов из dict'ов (period.json).

    Порядок сохраняется: он определяет id при регистрации. Контракт
    проверяется для всех элементов до создания первой модели.

    Raises:
        InvalidInput: нарушения контракта, по всем элементам сразу
        pydantic.ValidationError: нарушен инвариант модели (start_time < end_time)
    """
    items = [dict(item) for item in data]
    problems = [
        f"periods[{index}]/{error}"
        for index, item in enumerate(items)
        for error in contract_errors(Contract.PERIOD, item)
    ]
    if problems:
        raise InvalidInput("Invalid period definitions: " + "; ".join(problems))
    return [Period.model_validate(item) for item in items]
