"""
Energy — модели результатов начисления и потребления энергии

- ConsumptionPool: независимо учитываемые пулы потребления (regular, LBA)
- EnergyBreakdown: полный разбор энергии аккаунта в периоде (energy_report)
- AllocationResult: результат use_energy (разбиение запроса по пулам)
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .auction import AuctionSnapshot


# =============================================================================
# ENUMS
# =============================================================================


class ConsumptionPool(str, Enum):
    """Пул потребления энергии"""

    REGULAR = "regular"
    LBA = "lba"


# =============================================================================
# ENERGY BREAKDOWN
# =============================================================================


class EnergyBreakdown(BaseModel):
    """
    Разбор энергии аккаунта в одном периоде на момент now.

    Соответствует схеме energy_report.json.
    Доступная энергия каждого пула = max(0, produced − consumed).
    """

    # Контекст
    account: str = Field(..., min_length=1, description="Адрес аккаунта")
    period_id: int = Field(..., ge=1, description="Идентификатор периода")
    as_of: int = Field(..., ge=0, description="Момент расчёта (unix seconds)")
    window_start: int = Field(..., ge=0, description="Начало окна начисления")
    window_end: int = Field(..., ge=0, description="Конец окна начисления: min(now, end_time)")

    # Производство по источникам
    primary_energy: int = Field(..., ge=0, description="Энергия от primary стейка")
    lp_energy: int = Field(..., ge=0, description="Энергия от LP стейка")
    lba_energy: int = Field(..., ge=0, description="Энергия от LBA ликвидности")

    # Потребление по пулам (сырые счётчики)
    consumed_regular: int = Field(..., ge=0, description="Потреблено из regular пула")
    consumed_lba: int = Field(..., ge=0, description="Потреблено из LBA пула")

    # Доступно
    available_regular: int = Field(..., ge=0, description="Доступно в regular пуле")
    available_lba: int = Field(..., ge=0, description="Доступно в LBA пуле")

    auction: AuctionSnapshot = Field(..., description="Живой снапшот auction oracle")

    model_config = {"frozen": True}

    @property
    def regular_energy(self) -> int:
        """Regular производство: primary + LP."""
        return self.primary_energy + self.lp_energy

    @property
    def total_available(self) -> int:
        return self.available_regular + self.available_lba


# =============================================================================
# ALLOCATION RESULT
# =============================================================================


class AllocationResult(BaseModel):
    """
    Результат use_energy.

    from_lba + from_regular всегда равно запрошенному amount:
    regular пул безусловно поглощает остаток.
    """

    account: str = Field(..., min_length=1, description="Адрес аккаунта")
    period_id: int = Field(..., ge=1, description="Период, в котором считалась LBA энергия")
    amount: int = Field(..., ge=0, description="Запрошенная сумма")
    from_lba: int = Field(..., ge=0, description="Списано из LBA пула")
    from_regular: int = Field(..., ge=0, description="Списано из regular пула")
    lba_available_before: int = Field(
        ..., ge=0, description="Доступная LBA энергия до списания"
    )

    model_config = {"frozen": True}

    @field_validator("from_regular")
    @classmethod
    def validate_split(cls, v: int, info) -> int:
        """Проверка, что разбиение покрывает запрос ровно."""
        if "amount" in info.data and "from_lba" in info.data:
            if info.data["from_lba"] + v != info.data["amount"]:
                raise ValueError(
                    f"from_lba {info.data['from_lba']} + from_regular {v} "
                    f"!= amount {info.data['amount']}"
                )
        return v

    @property
    def shortfall_absorbed(self) -> bool:
        """True если LBA пула не хватило и остаток ушёл в regular."""
        return self.from_regular > 0
