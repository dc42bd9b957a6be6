"""Period Registry — реестр производственных циклов.

- Последовательные id начиная с 1 (0 = "нет периода")
- Периоды хранятся по значению в порядке регистрации, id == позиция + 1
- Пересечения и хронологический порядок не проверяются
- update_period заменяет окно/rates на месте, id и позиция не меняются
- Счётчик id никогда не уменьшается
"""

import logging
from typing import Iterator, List, Sequence, Tuple

from staking_energy.collaborators.interfaces import AccessControl
from staking_energy.core.domain.accounts import Role
from staking_energy.core.domain.period import Period
from staking_energy.core.errors import InvalidInput, InvalidPeriod, Unauthorized
from staking_energy.core.math.fixed_point import is_strict_int

logger = logging.getLogger(__name__)

NO_PERIOD_ID = 0


class PeriodRegistry:
    """Упорядоченная коллекция Periods с поиском "какое окно содержит now".

    Мутации (add_period, add_periods, update_period) требуют роли manager.
    """

    def __init__(self, access_control: AccessControl):
        self._access_control = access_control
        self._periods: List[Period] = []

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_period(self, caller: str, period: Period) -> int:
        """Регистрация периода.

        Returns:
            Новый period id
        """
        return self.add_periods(caller, [period])[0]

    def add_periods(self, caller: str, periods: Sequence[Period]) -> List[int]:
        """Регистрация нескольких периодов за один вызов (всё или ничего).

        Returns:
            Выданные period ids в порядке periods
        """
        self._require_manager(caller)
        periods = list(periods)
        for period in periods:
            self._require_period(period)

        first_id = len(self._periods) + 1
        self._periods.extend(periods)
        ids = list(range(first_id, first_id + len(periods)))

        for period_id, period in zip(ids, periods):
            logger.info(
                "Period added: id=%d window=[%d, %d) rates=(%d, %d, %d)",
                period_id,
                period.start_time,
                period.end_time,
                period.primary_rate,
                period.lp_rate,
                period.lba_rate,
            )
        return ids

    def update_period(self, caller: str, period_id: int, period: Period) -> None:
        """Замена окна/rates периода на месте.

        Допускается и для уже начавшихся или завершённых периодов.
        """
        self._require_manager(caller)
        self._require_period_id(period_id)
        self._require_period(period)

        previous = self._periods[period_id - 1]
        self._periods[period_id - 1] = period
        logger.info(
            "Period updated: id=%d window=[%d, %d) -> [%d, %d)",
            period_id,
            previous.start_time,
            previous.end_time,
            period.start_time,
            period.end_time,
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def period_count(self) -> int:
        """Последний выданный period id."""
        return len(self._periods)

    def get_period(self, period_id: int) -> Period:
        self._require_period_id(period_id)
        return self._periods[period_id - 1]

    def get_current_period_id(self, now: int) -> int:
        """Id первого (в порядке регистрации) периода, содержащего now; 0 если нет."""
        for period_id, period in self.periods():
            if period.contains(now):
                return period_id
        return NO_PERIOD_ID

    def get_current_period(self, now: int) -> Period:
        """Текущий период или Period.empty() если активного периода нет."""
        period_id = self.get_current_period_id(now)
        if period_id == NO_PERIOD_ID:
            return Period.empty()
        return self.get_period(period_id)

    def periods(self) -> Iterator[Tuple[int, Period]]:
        """Пары (id, Period) в порядке регистрации."""
        return ((index + 1, period) for index, period in enumerate(self._periods))

    # -------------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------------

    def _require_manager(self, caller: str) -> None:
        if not self._access_control.is_manager(caller):
            logger.warning("Period registry mutation rejected: caller=%s", caller)
            raise Unauthorized(caller, Role.MANAGER.value)

    def _require_period_id(self, period_id: int) -> None:
        if not is_strict_int(period_id) or period_id <= NO_PERIOD_ID or period_id > len(self._periods):
            raise InvalidPeriod(period_id, len(self._periods))

    @staticmethod
    def _require_period(period: object) -> None:
        if not isinstance(period, Period) or period.is_empty:
            raise InvalidInput(f"Expected a non-empty Period, got {period!r}")
