"""
In-memory реализации внешних коллабораторов

Тонкие хранилища без алгоритмической логики: используются в тестах,
симуляциях и как референс для адаптеров к реальным источникам.
"""

import logging
from collections import defaultdict
from typing import DefaultDict, Dict, List, Set, Tuple

from staking_energy.core.domain.accounts import Role
from staking_energy.core.domain.stake import StakeEvent, TokenClass
from staking_energy.core.math.fixed_point import validate_non_negative_int

logger = logging.getLogger(__name__)


# =============================================================================
# HISTORY PROVIDER
# =============================================================================


class InMemoryHistoryProvider:
    """История балансов стейкинга по (token_class, account)."""

    def __init__(self):
        self._events: DefaultDict[Tuple[TokenClass, str], List[StakeEvent]] = defaultdict(list)

    def record_balance(
        self, token_class: TokenClass, account: str, timestamp: int, balance: int
    ) -> StakeEvent:
        """
        Запись баланса после события.

        Raises:
            ValueError: Если timestamp раньше последнего события
        """
        history = self._events[(token_class, account)]
        if history and timestamp < history[-1].timestamp:
            raise ValueError(
                f"Event at {timestamp} precedes last recorded event at {history[-1].timestamp}"
            )
        event = StakeEvent(timestamp=timestamp, balance=balance)
        history.append(event)
        return event

    def balance_of(self, token_class: TokenClass, account: str) -> int:
        history = self._events.get((token_class, account))
        return history[-1].balance if history else 0

    def stake(
        self, token_class: TokenClass, account: str, timestamp: int, amount: int
    ) -> StakeEvent:
        validate_non_negative_int(amount, "amount")
        balance = self.balance_of(token_class, account) + amount
        return self.record_balance(token_class, account, timestamp, balance)

    def unstake(
        self, token_class: TokenClass, account: str, timestamp: int, amount: int
    ) -> StakeEvent:
        validate_non_negative_int(amount, "amount")
        current = self.balance_of(token_class, account)
        if amount > current:
            raise ValueError(f"Cannot unstake {amount}: balance is {current}")
        return self.record_balance(token_class, account, timestamp, current - amount)

    def get_history(
        self, token_class: TokenClass, account: str, up_to_time: int
    ) -> List[StakeEvent]:
        return [
            event
            for event in self._events.get((token_class, account), [])
            if event.timestamp <= up_to_time
        ]


# =============================================================================
# AUCTION ORACLE
# =============================================================================


class InMemoryAuctionOracle:
    """Claimable LBA ликвидность аккаунтов и глобальное время разблокировки."""

    def __init__(self, release_time: int = 0):
        self._release_time = validate_non_negative_int(release_time, "release_time")
        self._claimable: Dict[str, int] = {}

    def set_claimable(self, account: str, amount: int) -> None:
        self._claimable[account] = validate_non_negative_int(amount, "amount")

    def set_release_time(self, release_time: int) -> None:
        self._release_time = validate_non_negative_int(release_time, "release_time")

    def withdraw(self, account: str) -> int:
        """Вывод всей claimable ликвидности. Возвращает выведенную сумму."""
        amount = self._claimable.pop(account, 0)
        logger.info("LBA liquidity withdrawn: account=%s amount=%d", account, amount)
        return amount

    def claimable_lp_amount(self, account: str) -> int:
        return self._claimable.get(account, 0)

    def lp_token_release_time(self) -> int:
        return self._release_time


# =============================================================================
# COUNTER STORE
# =============================================================================


class InMemoryCounterStore:
    """
    Монотонные счётчики consumed/earned одного пула.

    Уменьшение не поддерживается: отрицательная delta отклоняется.
    """

    def __init__(self, name: str = "counter"):
        self.name = name
        self._consumed: DefaultDict[str, int] = defaultdict(int)
        self._earned: DefaultDict[str, int] = defaultdict(int)

    def increase_consumed_amount(self, account: str, delta: int) -> None:
        self._consumed[account] += validate_non_negative_int(delta, "delta")

    def increase_earned_amount(self, account: str, delta: int) -> None:
        self._earned[account] += validate_non_negative_int(delta, "delta")

    def get_consumed_amount(self, account: str) -> int:
        return self._consumed.get(account, 0)

    def get_earned_amount(self, account: str) -> int:
        return self._earned.get(account, 0)

    def rollback_consumed_amount(self, account: str, delta: int) -> None:
        """
        Откат increment'а, сделанного в том же списании.

        Raises:
            ValueError: delta больше текущего значения счётчика
        """
        delta = validate_non_negative_int(delta, "delta")
        current = self._consumed.get(account, 0)
        if delta > current:
            raise ValueError(
                f"Cannot roll back {delta} from {self.name} counter of {account}: "
                f"consumed is {current}"
            )
        self._consumed[account] = current - delta
        logger.warning(
            "Consumed counter rolled back: counter=%s account=%s delta=%d",
            self.name,
            account,
            delta,
        )


# =============================================================================
# ACCESS CONTROL
# =============================================================================


class RoleRegistry:
    """Реестр ролей: manager управляет периодами и allow-list потребителей."""

    def __init__(self):
        self._members: DefaultDict[Role, Set[str]] = defaultdict(set)

    def grant_role(self, role: Role, address: str) -> None:
        self._members[role].add(address)
        logger.info("Role granted: role=%s address=%s", role.value, address)

    def revoke_role(self, role: Role, address: str) -> None:
        self._members[role].discard(address)
        logger.info("Role revoked: role=%s address=%s", role.value, address)

    def has_role(self, role: Role, address: str) -> bool:
        return address in self._members.get(role, ())

    def is_manager(self, address: str) -> bool:
        return self.has_role(Role.MANAGER, address)

    def is_authorized_consumer(self, address: str) -> bool:
        return self.has_role(Role.CONSUMER, address)
