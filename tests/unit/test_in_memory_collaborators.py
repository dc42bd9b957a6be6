"""Тесты для in-memory коллабораторов и их соответствия протоколам."""

import pytest

from staking_energy.collaborators import (
    AccessControl,
    AuctionOracle,
    CounterStore,
    HistoryProvider,
    InMemoryAuctionOracle,
    InMemoryCounterStore,
    InMemoryHistoryProvider,
    RoleRegistry,
)
from staking_energy.core.domain import Role, StakeEvent, TokenClass

T = 1_700_000_000
ALICE = "0x" + "aa" * 20


class TestProtocols:
    def test_runtime_protocol_conformance(self):
        assert isinstance(InMemoryHistoryProvider(), HistoryProvider)
        assert isinstance(InMemoryAuctionOracle(), AuctionOracle)
        assert isinstance(InMemoryCounterStore(), CounterStore)
        assert isinstance(RoleRegistry(), AccessControl)


class TestInMemoryHistoryProvider:
    def test_stake_and_unstake(self):
        history = InMemoryHistoryProvider()
        history.stake(TokenClass.PRIMARY, ALICE, T, 5)
        history.stake(TokenClass.PRIMARY, ALICE, T + 10, 10)
        history.unstake(TokenClass.PRIMARY, ALICE, T + 20, 12)

        assert history.get_history(TokenClass.PRIMARY, ALICE, T + 100) == [
            StakeEvent(timestamp=T, balance=5),
            StakeEvent(timestamp=T + 10, balance=15),
            StakeEvent(timestamp=T + 20, balance=3),
        ]

    def test_history_bounded_by_up_to_time(self):
        history = InMemoryHistoryProvider()
        history.record_balance(TokenClass.LP, ALICE, T, 5)
        history.record_balance(TokenClass.LP, ALICE, T + 10, 7)
        assert len(history.get_history(TokenClass.LP, ALICE, T + 9)) == 1

    def test_token_classes_isolated(self):
        history = InMemoryHistoryProvider()
        history.stake(TokenClass.PRIMARY, ALICE, T, 5)
        assert history.get_history(TokenClass.LP, ALICE, T) == []
        assert history.balance_of(TokenClass.LP, ALICE) == 0

    def test_out_of_order_rejected(self):
        history = InMemoryHistoryProvider()
        history.record_balance(TokenClass.PRIMARY, ALICE, T + 10, 5)
        with pytest.raises(ValueError, match="precedes"):
            history.record_balance(TokenClass.PRIMARY, ALICE, T, 5)

    def test_unstake_more_than_balance(self):
        history = InMemoryHistoryProvider()
        history.stake(TokenClass.PRIMARY, ALICE, T, 5)
        with pytest.raises(ValueError, match="Cannot unstake"):
            history.unstake(TokenClass.PRIMARY, ALICE, T + 1, 6)


class TestInMemoryAuctionOracle:
    def test_claimable_and_withdraw(self):
        oracle = InMemoryAuctionOracle(release_time=T)
        oracle.set_claimable(ALICE, 10)
        assert oracle.claimable_lp_amount(ALICE) == 10
        assert oracle.withdraw(ALICE) == 10
        assert oracle.claimable_lp_amount(ALICE) == 0
        assert oracle.withdraw(ALICE) == 0

    def test_release_time(self):
        oracle = InMemoryAuctionOracle()
        assert oracle.lp_token_release_time() == 0
        oracle.set_release_time(T)
        assert oracle.lp_token_release_time() == T

    def test_negative_claimable_rejected(self):
        with pytest.raises(ValueError):
            InMemoryAuctionOracle().set_claimable(ALICE, -1)


class TestInMemoryCounterStore:
    def test_counters_accumulate(self):
        store = InMemoryCounterStore()
        store.increase_consumed_amount(ALICE, 5)
        store.increase_consumed_amount(ALICE, 7)
        store.increase_earned_amount(ALICE, 3)
        assert store.get_consumed_amount(ALICE) == 12
        assert store.get_earned_amount(ALICE) == 3

    def test_monotonic(self):
        store = InMemoryCounterStore()
        with pytest.raises(ValueError, match="non-negative"):
            store.increase_consumed_amount(ALICE, -1)

    def test_rollback_consumed(self):
        store = InMemoryCounterStore()
        store.increase_consumed_amount(ALICE, 5)
        store.rollback_consumed_amount(ALICE, 5)
        assert store.get_consumed_amount(ALICE) == 0

    def test_rollback_beyond_counter_rejected(self):
        store = InMemoryCounterStore()
        store.increase_consumed_amount(ALICE, 5)
        with pytest.raises(ValueError, match="Cannot roll back"):
            store.rollback_consumed_amount(ALICE, 6)
        assert store.get_consumed_amount(ALICE) == 5


class TestRoleRegistry:
    def test_grant_and_revoke(self):
        roles = RoleRegistry()
        roles.grant_role(Role.MANAGER, ALICE)
        assert roles.is_manager(ALICE)
        assert not roles.is_authorized_consumer(ALICE)
        roles.revoke_role(Role.MANAGER, ALICE)
        assert not roles.is_manager(ALICE)

    def test_revoke_missing_is_noop(self):
        roles = RoleRegistry()
        roles.revoke_role(Role.CONSUMER, ALICE)
        assert not roles.has_role(Role.CONSUMER, ALICE)
