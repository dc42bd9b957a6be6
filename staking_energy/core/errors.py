"""
Errors — таксономия ошибок Energy Engine

Все ошибки синхронные и не восстанавливаемые в рамках вызова:
операция отклоняется целиком, частичные изменения состояния не фиксируются.
Retry-логики внутри ядра нет.

Иерархия:
    EnergyEngineError
    ├── InvalidInput    — zero address, некорректная сумма или тип аргумента
    ├── InvalidPeriod   — period id == 0 или больше последнего выданного id
    ├── Unauthorized    — у вызывающего нет роли / не в allow-list
    └── InvalidHistory  — history provider нарушил контракт (порядок, up_to_time)
"""


class EnergyEngineError(Exception):
    """Базовый класс всех ошибок Energy Engine."""

    pass


class InvalidInput(EnergyEngineError, ValueError):
    """
    Некорректный входной аргумент.

    Основной случай — zero address там, где требуется аккаунт.
    Никогда не подменяется значением по умолчанию.
    """

    pass


class InvalidPeriod(EnergyEngineError, LookupError):
    """
    Ссылка на несуществующий период.

    Period id 0 зарезервирован как "нет периода", id больше period_count
    ещё не выдан.
    """

    def __init__(self, period_id: int, period_count: int):
        self.period_id = period_id
        self.period_count = period_count
        super().__init__(
            f"Invalid period id {period_id} (registered periods: 1..{period_count})"
        )


class Unauthorized(EnergyEngineError, PermissionError):
    """Вызывающий не обладает требуемой ролью для мутирующей операции."""

    def __init__(self, caller: str, required: str):
        self.caller = caller
        self.required = required
        super().__init__(f"{caller} is not authorized: {required} role required")


class InvalidHistory(EnergyEngineError, ValueError):
    """History provider вернул неупорядоченную или выходящую за границу историю."""

    pass
