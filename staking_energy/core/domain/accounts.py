"""
Accounts — адреса аккаунтов и роли доступа
"""

from enum import Enum
from typing import Final

from staking_energy.core.errors import InvalidInput

ZERO_ADDRESS: Final[str] = "0x" + "0" * 40


class Role(str, Enum):
    """Роль в access control"""

    MANAGER = "manager"
    CONSUMER = "consumer"


def is_zero_address(address: str) -> bool:
    """True для zero address в любой записи (0x, 0x0, 0x000...0)."""
    body = address[2:] if address.lower().startswith("0x") else address
    return set(body) <= {"0"}


def validate_account(account: object) -> str:
    """
    Проверка адреса аккаунта.

    Raises:
        InvalidInput: Если адрес не строка, пустой или zero address
    """
    if not isinstance(account, str) or not account.strip():
        raise InvalidInput(f"Account must be a non-empty address string, got {account!r}")
    if is_zero_address(account):
        raise InvalidInput("Zero address is not a valid account")
    return account
