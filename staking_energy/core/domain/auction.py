"""
AuctionSnapshot — живой снапшот LBA ликвидности аккаунта

Читается из auction oracle в момент расчёта и не сохраняется ядром.
"""

from pydantic import BaseModel, Field


class AuctionSnapshot(BaseModel):
    """Claimable (ещё не выведенная) ликвидность и время её разблокировки."""

    claimable_amount: int = Field(..., ge=0, description="Claimable LP amount аккаунта")
    release_time: int = Field(..., ge=0, description="Глобальное время разблокировки LP (unix seconds)")

    model_config = {"frozen": True}

    @property
    def has_liquidity(self) -> bool:
        return self.claimable_amount > 0
