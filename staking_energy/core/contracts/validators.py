"""
JSON Schema Contracts

Схемы внешних данных Staking Energy, поставляемые вместе с пакетом:
- period.json (период из конфигурационного файла)
- energy_config.json (конфигурация начисления)
- energy_report.json (сериализованный EnergyBreakdown)

Для каждого контракта один Draft 2020-12 валидатор, схема проверяется
meta-схемой при первом обращении.
"""

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from jsonschema import Draft202012Validator, SchemaError
from pydantic import BaseModel

SCHEMA_DIR = Path(__file__).parent / "schema"


class Contract(str, Enum):
    """Контракты пакета (имя файла схемы без расширения)"""

    PERIOD = "period"
    ENERGY_CONFIG = "energy_config"
    ENERGY_REPORT = "energy_report"


@lru_cache(maxsize=None)
def load_schema(contract: Contract) -> Dict[str, Any]:
    """
    Загрузка и meta-валидация схемы контракта.

    Raises:
        FileNotFoundError: файл схемы отсутствует в пакете
        ValueError: схема не проходит meta-валидацию Draft 2020-12
    """
    contract = Contract(contract)
    schema_path = SCHEMA_DIR / f"{contract.value}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e
    return schema


@lru_cache(maxsize=None)
def _validator(contract: Contract) -> Draft202012Validator:
    return Draft202012Validator(load_schema(contract))


def contract_errors(contract: Contract, data: Mapping[str, Any]) -> List[str]:
    """Все нарушения контракта в виде "path: message", в порядке путей."""
    errors = sorted(
        _validator(Contract(contract)).iter_errors(data),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    return [
        f"{'/'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}"
        for e in errors
    ]


def validate_period(data: Mapping[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: данные периода не соответствуют period.json
    """
    _validator(Contract.PERIOD).validate(data)


def validate_energy_config(data: Mapping[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: конфигурация не соответствует energy_config.json
    """
    _validator(Contract.ENERGY_CONFIG).validate(data)


def validate_energy_report(report: Union[BaseModel, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Валидация отчёта об энергии.

    Принимает EnergyBreakdown или его JSON-представление; модель
    сериализуется в JSON mode (int остаются int, enum → value).

    Returns:
        Проверенный отчёт как dict

    Raises:
        jsonschema.ValidationError: отчёт не соответствует energy_report.json
    """
    data = report.model_dump(mode="json") if isinstance(report, BaseModel) else dict(report)
    _validator(Contract.ENERGY_REPORT).validate(data)
    return data
