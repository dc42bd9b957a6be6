"""
Интерфейсы внешних коллабораторов Energy Engine

Ядро зависит только от этих протоколов:
- HistoryProvider: история балансов стейкинга (primary, LP)
- AuctionOracle: claimable LBA ликвидность и время её разблокировки
- CounterStore: монотонные счётчики consumed/earned (по экземпляру на пул)
- AccessControl: роли manager и consumer
"""

from typing import Protocol, Sequence, runtime_checkable

from staking_energy.core.domain.stake import StakeEvent, TokenClass


@runtime_checkable
class HistoryProvider(Protocol):
    def get_history(
        self, token_class: TokenClass, account: str, up_to_time: int
    ) -> Sequence[StakeEvent]:
        """Упорядоченная по времени история; никогда не содержит timestamp > up_to_time."""
        ...


@runtime_checkable
class AuctionOracle(Protocol):
    def claimable_lp_amount(self, account: str) -> int:
        ...

    def lp_token_release_time(self) -> int:
        ...


@runtime_checkable
class CounterStore(Protocol):
    def increase_consumed_amount(self, account: str, delta: int) -> None:
        ...

    def increase_earned_amount(self, account: str, delta: int) -> None:
        ...

    def get_consumed_amount(self, account: str) -> int:
        ...

    def get_earned_amount(self, account: str) -> int:
        ...

    def rollback_consumed_amount(self, account: str, delta: int) -> None:
        """Отмена increase_consumed_amount из незавершённого списания."""
        ...


@runtime_checkable
class AccessControl(Protocol):
    def is_manager(self, address: str) -> bool:
        ...

    def is_authorized_consumer(self, address: str) -> bool:
        ...
