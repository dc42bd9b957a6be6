"""Consumption Allocator — списание энергии с приоритетом LBA пула.

Алгоритм use_energy:
1. lba_available = max(0, lba_production(period, now) − consumed_lba)
2. from_lba = min(amount, lba_available)
3. from_regular = amount − from_lba
4. consumed_lba += from_lba; consumed_regular += from_regular
   (сбой записи regular откатывает уже записанный LBA increment)

Regular пул безусловно поглощает остаток: покрытие regular производством
не проверяется, перерасход допустим и гасится на стороне чтения
(available никогда не отрицательный).

Check-then-commit выполняется под lock аллокатора: два конкурентных
вызова не могут увидеть один и тот же LBA headroom.
"""

import logging
import threading

from staking_energy.accrual.engine import AccrualEngine
from staking_energy.collaborators.interfaces import AccessControl
from staking_energy.core.domain.accounts import Role, validate_account
from staking_energy.core.domain.energy import AllocationResult, ConsumptionPool
from staking_energy.core.errors import InvalidInput, Unauthorized
from staking_energy.core.math.fixed_point import is_strict_int

logger = logging.getLogger(__name__)


class ConsumptionAllocator:
    """Списание энергии по пулам и чтение счётчиков потребления."""

    def __init__(self, engine: AccrualEngine, access_control: AccessControl):
        self.engine = engine
        self._access_control = access_control
        self._lock = threading.RLock()

    @property
    def regular_counter(self):
        return self.engine.regular_counter

    @property
    def lba_counter(self):
        return self.engine.lba_counter

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def use_energy(
        self, caller: str, account: str, period_id: int, amount: int, now: int
    ) -> AllocationResult:
        """Списание amount энергии аккаунта: сначала LBA пул, остаток — regular.

        Args:
            caller: вызывающий (должен быть в allow-list потребителей)
            account: аккаунт, чья энергия списывается
            period_id: период, в котором считается LBA производство
            amount: сумма списания (int >= 0)
            now: момент списания

        Returns:
            AllocationResult с разбиением по пулам

        Raises:
            Unauthorized: caller не в allow-list
            InvalidInput: zero address или некорректный amount
            InvalidPeriod: period_id == 0 или > period_count
        """
        self._require_consumer(caller)
        validate_account(account)
        self._require_amount(amount)

        with self._lock:
            lba_available = self.engine.calculate_available_lba_energy(
                account, period_id, now
            )
            from_lba = min(amount, lba_available)
            from_regular = amount - from_lba

            result = AllocationResult(
                account=account,
                period_id=period_id,
                amount=amount,
                from_lba=from_lba,
                from_regular=from_regular,
                lba_available_before=lba_available,
            )

            self._commit(account, from_lba, from_regular)

        logger.info(
            "Energy used: caller=%s account=%s period=%d amount=%d "
            "from_lba=%d from_regular=%d",
            caller,
            account,
            period_id,
            amount,
            from_lba,
            from_regular,
        )
        return result

    def record_earned_energy(
        self,
        caller: str,
        account: str,
        amount: int,
        pool: ConsumptionPool = ConsumptionPool.REGULAR,
    ) -> None:
        """Учёт заработанной энергии во внешнем канале.

        Счётчик earned независим от calculate_energy и ведётся вручную.
        """
        self._require_consumer(caller)
        validate_account(account)
        self._require_amount(amount)

        counter = self.lba_counter if pool == ConsumptionPool.LBA else self.regular_counter
        with self._lock:
            counter.increase_earned_amount(account, amount)
        logger.info(
            "Energy earned recorded: caller=%s account=%s pool=%s amount=%d",
            caller,
            account,
            pool.value,
            amount,
        )

    def _commit(self, account: str, from_lba: int, from_regular: int) -> None:
        """Запись обоих разбиений: либо оба счётчика выросли, либо ни один."""
        self.lba_counter.increase_consumed_amount(account, from_lba)
        try:
            self.regular_counter.increase_consumed_amount(account, from_regular)
        except Exception:
            logger.error(
                "Regular counter commit failed, rolling back LBA: account=%s "
                "from_lba=%d from_regular=%d",
                account,
                from_lba,
                from_regular,
            )
            self.lba_counter.rollback_consumed_amount(account, from_lba)
            raise

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_consumed_energy(self, account: str) -> int:
        return self.regular_counter.get_consumed_amount(validate_account(account))

    def get_consumed_lba_energy(self, account: str) -> int:
        return self.lba_counter.get_consumed_amount(validate_account(account))

    def get_earned_energy(self, account: str) -> int:
        return self.regular_counter.get_earned_amount(validate_account(account))

    def get_earned_lba_energy(self, account: str) -> int:
        return self.lba_counter.get_earned_amount(validate_account(account))

    # -------------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------------

    def _require_consumer(self, caller: str) -> None:
        if not self._access_control.is_authorized_consumer(caller):
            logger.warning("Energy consumption rejected: caller=%s", caller)
            raise Unauthorized(caller, Role.CONSUMER.value)

    @staticmethod
    def _require_amount(amount: object) -> None:
        if not is_strict_int(amount) or amount < 0:
            raise InvalidInput(f"Amount must be a non-negative int, got {amount!r}")
