"""
Fixed-Point — целочисленные примитивы для расчёта энергии

Все величины (балансы, timestamps, rates, энергия) — Python int.
Float не участвует ни в одном расчёте энергии: результат детерминирован
и воспроизводим бит-в-бит.

Единицы:
- balance: единицы застейканного токена
- duration: секунды
- rate: fixed-point множитель "энергии на единицу стейка в сутки"
- energy = balance_seconds × rate // seconds_per_day
"""

from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Длина суток в секундах: rates выражены "в сутки"
SECONDS_PER_DAY: Final[int] = 86_400

# Масштаб fixed-point множителей (1.0 == 10**18)
RATE_SCALE: Final[int] = 10**18


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_strict_int(value: object) -> bool:
    """True для int, но не для bool (bool — подкласс int)."""
    return isinstance(value, int) and not isinstance(value, bool)


def validate_non_negative_int(value: object, name: str = "value") -> int:
    """
    Проверка, что значение — неотрицательный int.

    Args:
        value: Проверяемое значение
        name: Имя параметра для сообщения об ошибке

    Returns:
        value без изменений

    Raises:
        ValueError: Если value не int или отрицательный
    """
    if not is_strict_int(value):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def saturating_sub(minuend: int, subtrahend: int) -> int:
    """
    Вычитание с насыщением в ноль: max(0, minuend - subtrahend).

    Используется для available energy: потребление может превышать
    производство, но доступный остаток никогда не отрицательный.
    """
    return max(0, minuend - subtrahend)


def scale_energy(
    balance_seconds: int, rate: int, seconds_per_day: int = SECONDS_PER_DAY
) -> int:
    """
    Конверсия интеграла баланса по времени в энергию.

    energy = balance_seconds × rate // seconds_per_day

    Деление выполняется один раз после умножения на rate, поэтому
    округление (floor) происходит только на последнем шаге.

    Args:
        balance_seconds: Σ balance × duration (единицы × секунды)
        rate: Fixed-point множитель периода (в сутки)
        seconds_per_day: Длина суток в секундах

    Returns:
        Энергия (int, округление вниз)

    Examples:
        >>> scale_energy(45 * 86_400, 10**18)
        45000000000000000000
        >>> scale_energy(0, 10**18)
        0
    """
    if seconds_per_day <= 0:
        raise ValueError(f"seconds_per_day must be positive, got {seconds_per_day}")
    if balance_seconds <= 0 or rate <= 0:
        return 0
    return balance_seconds * rate // seconds_per_day
