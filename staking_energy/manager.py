"""EnergyManager — единая точка входа Staking Energy.

Связывает Period Registry, Accrual Engine и Consumption Allocator с внешними
коллабораторами и часами. Все зависящие от времени операции принимают
необязательный now (unix seconds); по умолчанию используется clock().

Поток данных:
    caller → PeriodRegistry (период) → AccrualEngine (производство)
           → ConsumptionAllocator (сравнение с счётчиками, разбиение, фиксация)
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from staking_energy.accrual.engine import AccrualEngine
from staking_energy.collaborators.in_memory import (
    InMemoryAuctionOracle,
    InMemoryCounterStore,
    InMemoryHistoryProvider,
    RoleRegistry,
)
from staking_energy.collaborators.interfaces import (
    AccessControl,
    AuctionOracle,
    CounterStore,
    HistoryProvider,
)
from staking_energy.consumption.allocator import ConsumptionAllocator
from staking_energy.core.config import EnergyConfig
from staking_energy.core.contracts import validate_energy_report
from staking_energy.core.domain.accounts import Role, validate_account
from staking_energy.core.domain.energy import AllocationResult, ConsumptionPool
from staking_energy.core.domain.period import Period
from staking_energy.core.errors import Unauthorized
from staking_energy.registry.period_registry import PeriodRegistry

logger = logging.getLogger(__name__)


def _wall_clock() -> int:
    return int(time.time())


class EnergyManager:
    """Façade: CRUD периодов, чтение энергии, списание и allow-list потребителей."""

    def __init__(
        self,
        access_control: AccessControl,
        history: HistoryProvider,
        oracle: AuctionOracle,
        regular_counter: CounterStore,
        lba_counter: CounterStore,
        config: Optional[EnergyConfig] = None,
        clock: Callable[[], int] = _wall_clock,
    ):
        self.access_control = access_control
        self.config = config or EnergyConfig()
        self.registry = PeriodRegistry(access_control)
        self.engine = AccrualEngine(
            self.registry, history, oracle, regular_counter, lba_counter, self.config
        )
        self.allocator = ConsumptionAllocator(self.engine, access_control)
        self._clock = clock

    @classmethod
    def in_memory(
        cls,
        manager: str,
        config: Optional[EnergyConfig] = None,
        clock: Callable[[], int] = _wall_clock,
        release_time: int = 0,
    ) -> "EnergyManager":
        """Менеджер поверх in-memory коллабораторов; manager получает роль MANAGER."""
        roles = RoleRegistry()
        roles.grant_role(Role.MANAGER, manager)
        return cls(
            access_control=roles,
            history=InMemoryHistoryProvider(),
            oracle=InMemoryAuctionOracle(release_time=release_time),
            regular_counter=InMemoryCounterStore("regular"),
            lba_counter=InMemoryCounterStore("lba"),
            config=config,
            clock=clock,
        )

    def _now(self, now: Optional[int]) -> int:
        return self._clock() if now is None else now

    # -------------------------------------------------------------------------
    # Periods
    # -------------------------------------------------------------------------

    def add_period(self, caller: str, period: Period) -> int:
        return self.registry.add_period(caller, period)

    def add_periods(self, caller: str, periods: Sequence[Period]) -> List[int]:
        return self.registry.add_periods(caller, periods)

    def update_period(self, caller: str, period_id: int, period: Period) -> None:
        self.registry.update_period(caller, period_id, period)

    def get_period(self, period_id: int) -> Period:
        return self.registry.get_period(period_id)

    def get_current_period_id(self, now: Optional[int] = None) -> int:
        return self.registry.get_current_period_id(self._now(now))

    def get_current_period(self, now: Optional[int] = None) -> Period:
        return self.registry.get_current_period(self._now(now))

    @property
    def period_count(self) -> int:
        return self.registry.period_count

    # -------------------------------------------------------------------------
    # Energy reads
    # -------------------------------------------------------------------------

    def calculate_energy(self, account: str, period_id: int, now: Optional[int] = None) -> int:
        return self.engine.calculate_energy(account, period_id, self._now(now))

    def calculate_available_lba_energy(
        self, account: str, period_id: int, now: Optional[int] = None
    ) -> int:
        return self.engine.calculate_available_lba_energy(account, period_id, self._now(now))

    def get_daily_primary_energy_production(self, account: str, now: Optional[int] = None) -> int:
        return self.engine.get_daily_primary_energy_production(account, self._now(now))

    def get_daily_lp_energy_production(self, account: str, now: Optional[int] = None) -> int:
        return self.engine.get_daily_lp_energy_production(account, self._now(now))

    def get_daily_lba_energy_production(self, account: str, now: Optional[int] = None) -> int:
        return self.engine.get_daily_lba_energy_production(account, self._now(now))

    def get_daily_energy_production(self, account: str, now: Optional[int] = None) -> int:
        return self.engine.get_daily_energy_production(account, self._now(now))

    def get_energy_for_current_period(self, account: str, now: Optional[int] = None) -> int:
        return self.engine.get_energy_for_current_period(account, self._now(now))

    def get_consumed_energy(self, account: str) -> int:
        return self.allocator.get_consumed_energy(account)

    def get_consumed_lba_energy(self, account: str) -> int:
        return self.allocator.get_consumed_lba_energy(account)

    def get_earned_energy(self, account: str) -> int:
        return self.allocator.get_earned_energy(account)

    def get_earned_lba_energy(self, account: str) -> int:
        return self.allocator.get_earned_lba_energy(account)

    def energy_report(
        self, account: str, period_id: int, now: Optional[int] = None
    ) -> Dict[str, Any]:
        """Разбор энергии в виде JSON-совместимого dict (контракт energy_report)."""
        return validate_energy_report(
            self.engine.energy_breakdown(account, period_id, self._now(now))
        )

    # -------------------------------------------------------------------------
    # Consumption
    # -------------------------------------------------------------------------

    def use_energy(
        self, caller: str, account: str, period_id: int, amount: int, now: Optional[int] = None
    ) -> AllocationResult:
        return self.allocator.use_energy(caller, account, period_id, amount, self._now(now))

    def record_earned_energy(
        self,
        caller: str,
        account: str,
        amount: int,
        pool: ConsumptionPool = ConsumptionPool.REGULAR,
    ) -> None:
        self.allocator.record_earned_energy(caller, account, amount, pool)

    # -------------------------------------------------------------------------
    # Consumer allow-list
    # -------------------------------------------------------------------------

    def add_consumer(self, caller: str, consumer: str) -> None:
        self._require_manager(caller)
        self._roles().grant_role(Role.CONSUMER, validate_account(consumer))

    def remove_consumer(self, caller: str, consumer: str) -> None:
        self._require_manager(caller)
        self._roles().revoke_role(Role.CONSUMER, validate_account(consumer))

    def is_consumer(self, address: str) -> bool:
        return self.access_control.is_authorized_consumer(address)

    def _require_manager(self, caller: str) -> None:
        if not self.access_control.is_manager(caller):
            logger.warning("Consumer allow-list change rejected: caller=%s", caller)
            raise Unauthorized(caller, Role.MANAGER.value)

    def _roles(self) -> RoleRegistry:
        if not isinstance(self.access_control, RoleRegistry):
            raise TypeError(
                "Consumer allow-list is managed by the external access control; "
                f"{type(self.access_control).__name__} does not support role grants"
            )
        return self.access_control
