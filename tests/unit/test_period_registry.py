"""Unit тесты для Period Registry.

Coverage:
- Последовательные id, период 0 зарезервирован
- add_periods: всё или ничего
- update_period на месте (id и count не меняются)
- get_current_period_id: первый по порядку регистрации, 0 в промежутках
- Проверки роли manager
"""

import pytest

from staking_energy.collaborators import RoleRegistry
from staking_energy.core.domain import Period, Role
from staking_energy.core.errors import InvalidInput, InvalidPeriod, Unauthorized
from staking_energy.registry import NO_PERIOD_ID, PeriodRegistry

T = 1_700_000_000
DAY = 86_400
MANAGER = "0x" + "11" * 20
STRANGER = "0x" + "22" * 20


def make_period(start: int, end: int, rate: int = 1) -> Period:
    return Period(start_time=start, end_time=end, primary_rate=rate, lp_rate=rate, lba_rate=rate)


@pytest.fixture
def registry():
    roles = RoleRegistry()
    roles.grant_role(Role.MANAGER, MANAGER)
    return PeriodRegistry(roles)


class TestPeriodRegistryMutations:
    def test_add_period_assigns_sequential_ids(self, registry):
        assert registry.add_period(MANAGER, make_period(T, T + DAY)) == 1
        assert registry.add_period(MANAGER, make_period(T + DAY, T + 2 * DAY)) == 2
        assert registry.period_count == 2

    def test_add_periods(self, registry):
        ids = registry.add_periods(
            MANAGER, [make_period(T, T + DAY), make_period(T + DAY, T + 2 * DAY)]
        )
        assert ids == [1, 2]
        assert registry.add_periods(MANAGER, [make_period(T, T + 1)]) == [3]

    def test_add_periods_empty(self, registry):
        assert registry.add_periods(MANAGER, []) == []
        assert registry.period_count == 0

    def test_add_periods_all_or_nothing(self, registry):
        with pytest.raises(InvalidInput):
            registry.add_periods(MANAGER, [make_period(T, T + DAY), "not a period"])
        assert registry.period_count == 0

    def test_add_empty_period_rejected(self, registry):
        with pytest.raises(InvalidInput):
            registry.add_period(MANAGER, Period.empty())

    def test_overlap_and_out_of_order_accepted(self, registry):
        registry.add_period(MANAGER, make_period(T + 10 * DAY, T + 20 * DAY))
        registry.add_period(MANAGER, make_period(T, T + 15 * DAY))
        assert registry.period_count == 2

    def test_add_requires_manager(self, registry):
        with pytest.raises(Unauthorized):
            registry.add_period(STRANGER, make_period(T, T + DAY))
        with pytest.raises(Unauthorized):
            registry.add_periods(STRANGER, [make_period(T, T + DAY)])
        assert registry.period_count == 0

    def test_update_period_in_place(self, registry):
        registry.add_period(MANAGER, make_period(T, T + DAY, rate=1))
        registry.add_period(MANAGER, make_period(T + DAY, T + 2 * DAY, rate=2))

        registry.update_period(MANAGER, 1, make_period(T, T + 3 * DAY, rate=7))

        assert registry.period_count == 2
        assert registry.get_period(1).end_time == T + 3 * DAY
        assert registry.get_period(1).primary_rate == 7
        assert registry.get_period(2).primary_rate == 2

    @pytest.mark.parametrize("period_id", [0, 2, -1])
    def test_update_invalid_id(self, registry, period_id):
        registry.add_period(MANAGER, make_period(T, T + DAY))
        with pytest.raises(InvalidPeriod):
            registry.update_period(MANAGER, period_id, make_period(T, T + DAY))

    def test_update_requires_manager(self, registry):
        registry.add_period(MANAGER, make_period(T, T + DAY))
        with pytest.raises(Unauthorized):
            registry.update_period(STRANGER, 1, make_period(T, T + 2 * DAY))
        assert registry.get_period(1).end_time == T + DAY


class TestPeriodRegistryReads:
    @pytest.fixture
    def populated(self, registry):
        registry.add_periods(
            MANAGER,
            [
                make_period(T, T + 10 * DAY, rate=1),
                make_period(T + 20 * DAY, T + 30 * DAY, rate=2),
            ],
        )
        return registry

    @pytest.mark.parametrize("period_id", [0, 3, -1])
    def test_get_period_invalid_id(self, populated, period_id):
        with pytest.raises(InvalidPeriod) as exc_info:
            populated.get_period(period_id)
        assert exc_info.value.period_count == 2

    def test_get_period_non_int_id(self, populated):
        with pytest.raises(InvalidPeriod):
            populated.get_period("1")

    def test_empty_registry(self, registry):
        assert registry.get_current_period_id(T) == NO_PERIOD_ID
        with pytest.raises(InvalidPeriod):
            registry.get_period(1)

    def test_current_period_inside_windows(self, populated):
        assert populated.get_current_period_id(T) == 1
        assert populated.get_current_period_id(T + 10 * DAY - 1) == 1
        assert populated.get_current_period_id(T + 25 * DAY) == 2

    def test_current_period_outside_windows(self, populated):
        assert populated.get_current_period_id(T - 1) == NO_PERIOD_ID
        assert populated.get_current_period_id(T + 10 * DAY) == NO_PERIOD_ID  # gap
        assert populated.get_current_period_id(T + 30 * DAY) == NO_PERIOD_ID

    def test_current_period_first_registered_wins_on_overlap(self, registry):
        registry.add_period(MANAGER, make_period(T + 5 * DAY, T + 15 * DAY, rate=1))
        registry.add_period(MANAGER, make_period(T, T + 20 * DAY, rate=2))
        assert registry.get_current_period_id(T + 10 * DAY) == 1
        assert registry.get_current_period_id(T + DAY) == 2

    def test_get_current_period(self, populated):
        assert populated.get_current_period(T + DAY).primary_rate == 1

    def test_get_current_period_none_active_returns_empty(self, populated):
        current = populated.get_current_period(T + 15 * DAY)
        assert current.is_empty
        assert current.primary_rate == 0

    def test_update_moving_window_away_gives_zero(self, populated):
        """Сдвиг окна через update_period: id 0 при сохранённом period_count."""
        populated.update_period(MANAGER, 1, make_period(T + 40 * DAY, T + 50 * DAY))
        assert populated.get_current_period_id(T + DAY) == NO_PERIOD_ID
        assert populated.period_count == 2

    def test_periods_view(self, populated):
        assert [period_id for period_id, _ in populated.periods()] == [1, 2]
