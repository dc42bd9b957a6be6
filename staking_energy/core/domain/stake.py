"""
StakeEvent — снапшот баланса стейкинга

Точка в истории history provider: баланс аккаунта сразу после события
stake/unstake. Ядро не владеет событиями и не кэширует их.
"""

from enum import Enum

from pydantic import BaseModel, Field, StrictInt


class TokenClass(str, Enum):
    """Класс токена в history provider"""

    PRIMARY = "primary"
    LP = "lp"


class StakeEvent(BaseModel):
    """Баланс после события в момент timestamp."""

    timestamp: StrictInt = Field(..., ge=0, description="Время события (unix seconds)")
    balance: StrictInt = Field(..., ge=0, description="Баланс после события")

    model_config = {"frozen": True}

    def as_observation(self) -> tuple[int, int]:
        return (self.timestamp, self.balance)
