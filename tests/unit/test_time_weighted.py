"""
Тесты для Time-Weighted Balance Integral и fixed-point примитивов

Проверяемые инварианты:
1. Snapshot и delta формы совпадают точно (целочисленная арифметика)
2. Линейность: stake a в t1 и b в t2 == (a+b) в t1 минус b × (t2 − t1)
3. Окно нулевой/отрицательной длины → 0
4. События до окна схлопываются на window_start, после окна не вносят вклад
"""

import pytest

from staking_energy.core.math import (
    RATE_SCALE,
    SECONDS_PER_DAY,
    clamp_timestamp,
    constant_balance_integral,
    integrate_deltas,
    integrate_snapshots,
    is_time_ordered,
    last_balance,
    saturating_sub,
    scale_energy,
    snapshots_to_deltas,
    validate_non_negative_int,
)

DAY = SECONDS_PER_DAY
T = 1_700_000_000


# =============================================================================
# ТЕСТЫ: integrate_snapshots
# =============================================================================


class TestIntegrateSnapshots:
    """Интеграл баланса по snapshot-событиям."""

    def test_reference_scenario(self):
        """(T,5),(T+1d,15),(T+2d,25) на T+3d → 45 баланс-суток."""
        snapshots = [(T, 5), (T + DAY, 15), (T + 2 * DAY, 25)]
        assert integrate_snapshots(snapshots, T, T + 3 * DAY) == 45 * DAY

    def test_empty_history(self):
        assert integrate_snapshots([], T, T + DAY) == 0

    def test_zero_length_window(self):
        assert integrate_snapshots([(T, 5)], T, T) == 0

    def test_inverted_window(self):
        """window_end < window_start (период ещё не начался) → 0."""
        assert integrate_snapshots([(T, 5)], T, T - DAY) == 0

    def test_first_event_inside_window_contributes_from_its_timestamp(self):
        """Интервал до первого события в окне не вносит вклад."""
        assert integrate_snapshots([(T + DAY, 10)], T, T + 3 * DAY) == 20 * DAY

    def test_pre_window_events_collapse_onto_start(self):
        """Последний баланс до окна переносится на window_start."""
        snapshots = [(T - 5 * DAY, 3), (T - DAY, 7), (T + DAY, 10)]
        assert integrate_snapshots(snapshots, T, T + 2 * DAY) == 7 * DAY + 10 * DAY

    def test_events_after_window_end_ignored(self):
        snapshots = [(T, 5), (T + 10 * DAY, 100)]
        assert integrate_snapshots(snapshots, T, T + 2 * DAY) == 10 * DAY

    def test_unstake_to_zero(self):
        snapshots = [(T, 10), (T + DAY, 0)]
        assert integrate_snapshots(snapshots, T, T + 5 * DAY) == 10 * DAY

    def test_same_timestamp_events_last_wins(self):
        snapshots = [(T, 10), (T, 4)]
        assert integrate_snapshots(snapshots, T, T + DAY) == 4 * DAY


# =============================================================================
# ТЕСТЫ: integrate_deltas
# =============================================================================


class TestIntegrateDeltas:
    """Delta-форма интеграла и её согласованность со snapshot-формой."""

    @pytest.mark.parametrize(
        "snapshots, window_start, window_end",
        [
            ([(T, 5), (T + DAY, 15), (T + 2 * DAY, 25)], T, T + 3 * DAY),
            ([(T - DAY, 8), (T + 3600, 2), (T + 7200, 9)], T, T + DAY),
            ([(T + 100, 1), (T + 200, 0), (T + 300, 50)], T, T + 250),
            ([(T, 10**24), (T + 1, 10**24 + 1)], T, T + 60 * DAY),
        ],
    )
    def test_delta_and_snapshot_forms_agree(self, snapshots, window_start, window_end):
        deltas = snapshots_to_deltas(snapshots)
        assert integrate_deltas(deltas, window_start, window_end) == integrate_snapshots(
            snapshots, window_start, window_end
        )

    def test_linearity(self):
        """Stake a в t1, ещё b в t2 == (a+b) в t1 минус b × (t2 − t1)."""
        a, b = 7, 13
        t1, t2, end = T, T + 2 * DAY, T + 5 * DAY

        incremental = integrate_snapshots([(t1, a), (t2, a + b)], T, end)
        single = integrate_snapshots([(t1, a + b)], T, end)

        assert incremental == single - b * (t2 - t1)

    def test_empty_window(self):
        assert integrate_deltas([(T, 5)], T, T) == 0

    def test_snapshots_to_deltas(self):
        assert snapshots_to_deltas([(1, 5), (2, 15), (3, 10)]) == [(1, 5), (2, 10), (3, -5)]


# =============================================================================
# ТЕСТЫ: вспомогательные функции
# =============================================================================


class TestHelpers:
    def test_clamp_timestamp(self):
        assert clamp_timestamp(5, 10, 20) == 10
        assert clamp_timestamp(15, 10, 20) == 15
        assert clamp_timestamp(25, 10, 20) == 20

    def test_is_time_ordered(self):
        assert is_time_ordered([])
        assert is_time_ordered([(1, 0), (1, 5), (2, 3)])
        assert not is_time_ordered([(2, 0), (1, 5)])

    def test_constant_balance_integral(self):
        assert constant_balance_integral(10, T, T + 3 * DAY) == 30 * DAY
        assert constant_balance_integral(0, T, T + 3 * DAY) == 0
        assert constant_balance_integral(10, T + DAY, T) == 0

    def test_last_balance(self):
        assert last_balance([]) == 0
        assert last_balance([(1, 5), (2, 25)]) == 25


class TestFixedPoint:
    def test_scale_energy_reference(self):
        assert scale_energy(45 * DAY, RATE_SCALE) == 45 * 10**18

    def test_scale_energy_fractional_rate(self):
        """1.36 × 20 баланс-суток = 27.2e18 точно."""
        assert scale_energy(20 * DAY, 136 * 10**16) == 272 * 10**17

    def test_scale_energy_floors(self):
        assert scale_energy(1, 1) == 0
        assert scale_energy(DAY + 1, 1) == 1

    def test_scale_energy_zero_rate(self):
        assert scale_energy(45 * DAY, 0) == 0

    def test_scale_energy_invalid_day(self):
        with pytest.raises(ValueError, match="must be positive"):
            scale_energy(DAY, 1, seconds_per_day=0)

    def test_saturating_sub(self):
        assert saturating_sub(10, 3) == 7
        assert saturating_sub(3, 10) == 0

    def test_validate_non_negative_int(self):
        assert validate_non_negative_int(5) == 5
        with pytest.raises(ValueError, match="non-negative"):
            validate_non_negative_int(-1)
        with pytest.raises(ValueError, match="must be an int"):
            validate_non_negative_int(1.5)
        with pytest.raises(ValueError, match="must be an int"):
            validate_non_negative_int(True)
