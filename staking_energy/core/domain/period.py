"""
Period — Модель производственного цикла

Immutable Pydantic модель: полуоткрытое окно [start_time, end_time) с тремя
fixed-point множителями начисления энергии (primary, LP, LBA).

Идентификатор периода не хранится в модели: его выдаёт PeriodRegistry
(последовательно с 1, 0 зарезервирован как "нет периода").
"""

from enum import Enum

from pydantic import BaseModel, Field, StrictInt, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class EnergySource(str, Enum):
    """Источник энергии"""

    PRIMARY = "primary"
    LP = "lp"
    LBA = "lba"


# =============================================================================
# PERIOD MODEL
# =============================================================================


class Period(BaseModel):
    """
    Модель производственного цикла.

    Immutable модель (frozen=True). update_period заменяет запись в реестре
    новым экземпляром, id и позиция в реестре не меняются.
    """

    # Окно
    start_time: StrictInt = Field(..., ge=0, description="Начало окна (unix seconds, включительно)")
    end_time: StrictInt = Field(..., gt=0, description="Конец окна (unix seconds, исключительно)")

    # Множители (fixed-point, энергия на единицу стейка в сутки)
    primary_rate: StrictInt = Field(..., ge=0, description="Множитель для primary токена")
    lp_rate: StrictInt = Field(..., ge=0, description="Множитель для LP токена")
    lba_rate: StrictInt = Field(..., ge=0, description="Множитель для LBA ликвидности")

    model_config = {"frozen": True}

    @field_validator("end_time")
    @classmethod
    def validate_window(cls, v: int, info) -> int:
        """Проверка, что start_time строго предшествует end_time."""
        if "start_time" in info.data and v <= info.data["start_time"]:
            raise ValueError(
                f"end_time {v} must be greater than start_time {info.data['start_time']}"
            )
        return v

    @classmethod
    def empty(cls) -> "Period":
        """
        Пустой период по умолчанию (id 0).

        Создаётся без валидации: окно нулевой длины и нулевые rates.
        Вызывающий код обязан проверять id 0 до использования rates.
        """
        return cls.model_construct(
            start_time=0, end_time=0, primary_rate=0, lp_rate=0, lba_rate=0
        )

    @property
    def is_empty(self) -> bool:
        return self.end_time <= self.start_time

    def contains(self, timestamp: int) -> bool:
        """Попадает ли timestamp в [start_time, end_time)."""
        return self.start_time <= timestamp < self.end_time

    def window_end(self, now: int) -> int:
        """Конец окна начисления: min(now, end_time). После end_time начисление заморожено."""
        return min(now, self.end_time)

    def rate_for(self, source: EnergySource) -> int:
        """Множитель периода для источника энергии."""
        if source == EnergySource.PRIMARY:
            return self.primary_rate
        elif source == EnergySource.LP:
            return self.lp_rate
        else:
            return self.lba_rate
