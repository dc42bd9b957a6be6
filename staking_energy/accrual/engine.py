"""Accrual Engine — начисление энергии аккаунту внутри периода.

Источники энергии:
- PRIMARY: интеграл primary стейка по времени × primary_rate
- LP: интеграл LP стейка по времени × lp_rate
- LBA: живой claimable amount × длительность LBA окна × lba_rate

Окно начисления: [period.start_time, min(now, period.end_time)].
- now < start_time → 0 (период ещё не начался)
- now >= end_time → начисление заморожено на end_time

LBA энергия всегда считается от ТЕКУЩЕГО claimable amount auction oracle:
после вывода ликвидности последующие чтения того же периода дают 0,
уже списанные суммы при этом не меняются.

Каждый вызов относится ровно к одному period id, периоды не агрегируются.
"""

import logging
from typing import List, Sequence

from staking_energy.collaborators.interfaces import (
    AuctionOracle,
    CounterStore,
    HistoryProvider,
)
from staking_energy.core.config import EnergyConfig
from staking_energy.core.domain.accounts import validate_account
from staking_energy.core.domain.auction import AuctionSnapshot
from staking_energy.core.domain.energy import EnergyBreakdown
from staking_energy.core.domain.period import EnergySource, Period
from staking_energy.core.domain.stake import StakeEvent, TokenClass
from staking_energy.core.errors import InvalidHistory
from staking_energy.core.math.fixed_point import saturating_sub, scale_energy
from staking_energy.core.math.time_weighted import (
    Observation,
    constant_balance_integral,
    integrate_snapshots,
    is_time_ordered,
    last_balance,
)
from staking_energy.registry.period_registry import NO_PERIOD_ID, PeriodRegistry

logger = logging.getLogger(__name__)

_TOKEN_CLASS_BY_SOURCE = {
    EnergySource.PRIMARY: TokenClass.PRIMARY,
    EnergySource.LP: TokenClass.LP,
}


class AccrualEngine:
    """Расчёт производства энергии по источникам и доступной энергии по пулам.

    Движок только читает счётчики потребления; списание выполняет
    ConsumptionAllocator.
    """

    def __init__(
        self,
        registry: PeriodRegistry,
        history: HistoryProvider,
        oracle: AuctionOracle,
        regular_counter: CounterStore,
        lba_counter: CounterStore,
        config: EnergyConfig | None = None,
    ):
        """
        Args:
            registry: реестр периодов
            history: история балансов primary/LP стейка
            oracle: auction oracle (claimable LBA ликвидность)
            regular_counter: счётчики regular пула
            lba_counter: счётчики LBA пула
            config: конфигурация начисления (default EnergyConfig())
        """
        self.registry = registry
        self.history = history
        self.oracle = oracle
        self.regular_counter = regular_counter
        self.lba_counter = lba_counter
        self.config = config or EnergyConfig()

    # -------------------------------------------------------------------------
    # Production per source
    # -------------------------------------------------------------------------

    def calculate_primary_energy(self, account: str, period_id: int, now: int) -> int:
        return self._production(account, period_id, EnergySource.PRIMARY, now)

    def calculate_lp_energy(self, account: str, period_id: int, now: int) -> int:
        return self._production(account, period_id, EnergySource.LP, now)

    def calculate_lba_energy(self, account: str, period_id: int, now: int) -> int:
        return self._production(account, period_id, EnergySource.LBA, now)

    def calculate_energy(self, account: str, period_id: int, now: int) -> int:
        """Regular производство периода: primary + LP."""
        return self.calculate_primary_energy(
            account, period_id, now
        ) + self.calculate_lp_energy(account, period_id, now)

    # -------------------------------------------------------------------------
    # Available energy per pool
    # -------------------------------------------------------------------------

    def calculate_available_energy(self, account: str, period_id: int, now: int) -> int:
        """max(0, regular производство − consumed_regular)."""
        produced = self.calculate_energy(account, period_id, now)
        return saturating_sub(produced, self.regular_counter.get_consumed_amount(account))

    def calculate_available_lba_energy(self, account: str, period_id: int, now: int) -> int:
        """max(0, LBA производство − consumed_lba). Пересчитывается от живого oracle."""
        produced = self.calculate_lba_energy(account, period_id, now)
        return saturating_sub(produced, self.lba_counter.get_consumed_amount(account))

    def get_energy_for_current_period(self, account: str, now: int) -> int:
        """
        Доступная энергия в текущем периоде.

        Returns:
            0 если активного периода нет, иначе
            max(0, regular − consumed_regular) + max(0, lba − consumed_lba)
        """
        validate_account(account)
        period_id = self.registry.get_current_period_id(now)
        if period_id == NO_PERIOD_ID:
            return 0
        return self.calculate_available_energy(
            account, period_id, now
        ) + self.calculate_available_lba_energy(account, period_id, now)

    # -------------------------------------------------------------------------
    # Daily production rates
    # -------------------------------------------------------------------------

    def get_daily_primary_energy_production(self, account: str, now: int) -> int:
        return self._daily_production(account, EnergySource.PRIMARY, now)

    def get_daily_lp_energy_production(self, account: str, now: int) -> int:
        return self._daily_production(account, EnergySource.LP, now)

    def get_daily_lba_energy_production(self, account: str, now: int) -> int:
        return self._daily_production(account, EnergySource.LBA, now)

    def get_daily_energy_production(self, account: str, now: int) -> int:
        """Сумма суточных скоростей трёх источников."""
        return sum(
            self._daily_production(account, source, now) for source in EnergySource
        )

    # -------------------------------------------------------------------------
    # Report
    # -------------------------------------------------------------------------

    def energy_breakdown(self, account: str, period_id: int, now: int) -> EnergyBreakdown:
        """Полный разбор энергии аккаунта в периоде на момент now."""
        validate_account(account)
        period = self.registry.get_period(period_id)

        primary = self._production(account, period_id, EnergySource.PRIMARY, now)
        lp = self._production(account, period_id, EnergySource.LP, now)
        lba = self._production(account, period_id, EnergySource.LBA, now)
        consumed_regular = self.regular_counter.get_consumed_amount(account)
        consumed_lba = self.lba_counter.get_consumed_amount(account)

        return EnergyBreakdown(
            account=account,
            period_id=period_id,
            as_of=now,
            window_start=period.start_time,
            window_end=max(0, period.window_end(now)),
            primary_energy=primary,
            lp_energy=lp,
            lba_energy=lba,
            consumed_regular=consumed_regular,
            consumed_lba=consumed_lba,
            available_regular=saturating_sub(primary + lp, consumed_regular),
            available_lba=saturating_sub(lba, consumed_lba),
            auction=self.auction_snapshot(account),
        )

    def auction_snapshot(self, account: str) -> AuctionSnapshot:
        return AuctionSnapshot(
            claimable_amount=self.oracle.claimable_lp_amount(account),
            release_time=self.oracle.lp_token_release_time(),
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _production(
        self, account: str, period_id: int, source: EnergySource, now: int
    ) -> int:
        validate_account(account)
        period = self.registry.get_period(period_id)
        rate = period.rate_for(source)
        window_end = period.window_end(now)

        if source == EnergySource.LBA:
            window_start = self.config.lba_window_start(period.start_time)
            balance_seconds = constant_balance_integral(
                self._lba_balance(account), window_start, window_end
            )
        else:
            observations = self._fetch_history(
                _TOKEN_CLASS_BY_SOURCE[source], account, period.end_time
            )
            balance_seconds = integrate_snapshots(
                observations, period.start_time, window_end
            )

        energy = scale_energy(balance_seconds, rate, self.config.seconds_per_day)
        logger.debug(
            "Energy production: account=%s period=%d source=%s now=%d "
            "balance_seconds=%d energy=%d",
            account,
            period_id,
            source.value,
            now,
            balance_seconds,
            energy,
        )
        return energy

    def _daily_production(self, account: str, source: EnergySource, now: int) -> int:
        validate_account(account)
        period = self._current_period(now)
        if period is None:
            return 0

        if source == EnergySource.LBA:
            # до старта LBA окна начисление ещё не идёт
            if now < self.config.lba_window_start(period.start_time):
                return 0
            balance = self._lba_balance(account)
        else:
            balance = last_balance(
                self._fetch_history(_TOKEN_CLASS_BY_SOURCE[source], account, now)
            )
        return balance * period.rate_for(source)

    def _lba_balance(self, account: str) -> int:
        """Живой claimable amount; 0 после вывода ликвидности."""
        snapshot = self.auction_snapshot(account)
        if not snapshot.has_liquidity:
            return 0
        return snapshot.claimable_amount

    def _current_period(self, now: int) -> Period | None:
        period_id = self.registry.get_current_period_id(now)
        if period_id == NO_PERIOD_ID:
            return None
        return self.registry.get_period(period_id)

    def _fetch_history(
        self, token_class: TokenClass, account: str, up_to_time: int
    ) -> List[Observation]:
        """Чтение истории с проверкой контракта history provider."""
        events: Sequence[StakeEvent] = self.history.get_history(
            token_class, account, up_to_time
        )
        observations = [event.as_observation() for event in events]

        if not is_time_ordered(observations):
            raise InvalidHistory(
                f"{token_class.value} history of {account} is not time-ordered"
            )
        if observations and observations[-1][0] > up_to_time:
            raise InvalidHistory(
                f"{token_class.value} history of {account} contains events after "
                f"{up_to_time}"
            )
        return observations
