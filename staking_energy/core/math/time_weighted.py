"""
Time-Weighted Balance Integral

Интеграл баланса по времени на нерегулярной последовательности событий,
ограниченный окном [window_start, window_end].

ФОРМУЛА (snapshot-форма):
    Σ balance_i × (t_{i+1} − t_i) + balance_last × (window_end − t_last)

ФОРМУЛА (delta-форма, эквивалентная):
    Σ delta_i × (window_end − t_i),   delta_i = balance_i − balance_{i−1}

Timestamps событий предварительно зажимаются в [window_start, window_end]:
- события до начала окна схлопываются на window_start (последний баланс
  до окна переносится в окно, остальные дают интервалы нулевой длины)
- события после window_end дают нулевой вклад

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только целочисленная арифметика — snapshot и delta формы совпадают точно
2. window_end <= window_start → 0
3. Пустая история → 0
"""

from typing import Iterable, List, Sequence, Tuple

# (timestamp, value), где value: баланс после события или signed delta
Observation = Tuple[int, int]


def clamp_timestamp(timestamp: int, window_start: int, window_end: int) -> int:
    """Зажать timestamp в [window_start, window_end]."""
    return min(max(timestamp, window_start), window_end)


def is_time_ordered(observations: Sequence[Observation]) -> bool:
    """True если timestamps не убывают."""
    return all(
        observations[i][0] <= observations[i + 1][0]
        for i in range(len(observations) - 1)
    )


def integrate_snapshots(
    snapshots: Iterable[Observation], window_start: int, window_end: int
) -> int:
    """
    Интеграл баланса по времени из snapshot-событий.

    Args:
        snapshots: Упорядоченные по времени пары (timestamp, balance_after_event)
        window_start: Начало окна (включительно)
        window_end: Конец окна (min(now, period_end))

    Returns:
        Σ balance × duration внутри окна (единицы × секунды)

    Examples:
        >>> day = 86_400
        >>> integrate_snapshots([(0, 5), (day, 15), (2 * day, 25)], 0, 3 * day) // day
        45
    """
    if window_end <= window_start:
        return 0

    total = 0
    prev_ts = None
    prev_balance = 0

    for timestamp, balance in snapshots:
        ts = clamp_timestamp(timestamp, window_start, window_end)
        if prev_ts is not None:
            total += prev_balance * (ts - prev_ts)
        prev_ts = ts
        prev_balance = balance

    if prev_ts is not None:
        total += prev_balance * (window_end - prev_ts)

    return total


def integrate_deltas(
    deltas: Iterable[Observation], window_start: int, window_end: int
) -> int:
    """
    Интеграл баланса по времени из инкрементальных изменений.

    Каждое изменение баланса delta в момент t вносит delta × (window_end − t).

    Args:
        deltas: Упорядоченные по времени пары (timestamp, signed_delta)
        window_start: Начало окна (включительно)
        window_end: Конец окна

    Returns:
        Σ balance × duration внутри окна; совпадает с integrate_snapshots
        для эквивалентной последовательности
    """
    if window_end <= window_start:
        return 0

    return sum(
        delta * (window_end - clamp_timestamp(timestamp, window_start, window_end))
        for timestamp, delta in deltas
    )


def snapshots_to_deltas(snapshots: Iterable[Observation]) -> List[Observation]:
    """Конверсия snapshot-последовательности в delta-последовательность."""
    deltas: List[Observation] = []
    prev_balance = 0
    for timestamp, balance in snapshots:
        deltas.append((timestamp, balance - prev_balance))
        prev_balance = balance
    return deltas


def constant_balance_integral(balance: int, window_start: int, window_end: int) -> int:
    """Интеграл постоянного баланса по окну: balance × max(0, end − start)."""
    if balance <= 0 or window_end <= window_start:
        return 0
    return balance * (window_end - window_start)


def last_balance(snapshots: Sequence[Observation]) -> int:
    """Баланс последнего события (0 для пустой истории)."""
    if not snapshots:
        return 0
    return snapshots[-1][1]
