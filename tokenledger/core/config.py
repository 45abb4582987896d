# tokenledger/core/config.py

"""
Token configuration.

Values can be given directly or loaded from environment variables:

    TOKENLEDGER_DECIMALS: default decimals reported by a token (default: 18)
    TOKENLEDGER_AMOUNT_BITS: width of the unsigned amount type (default: 256)
    TOKENLEDGER_ERROR_PREFIX: prefix of every error message (default: ERC20)
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAX_DECIMALS = 255


def validate_decimals(decimals: int) -> int:
    """Decimals are uint8 metadata; they never affect arithmetic."""
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ValueError(f"Decimals must be an integer, got {decimals!r}")
    if decimals < 0 or decimals > MAX_DECIMALS:
        raise ValueError(f"Decimals must be between 0 and {MAX_DECIMALS}, got {decimals}")
    return decimals


@dataclass
class TokenConfig:
    """Settings shared by a ledger and the token wrapping it."""
    decimals: int = 18
    amount_bits: int = 256
    error_prefix: str = "ERC20"

    def __post_init__(self):
        validate_decimals(self.decimals)
        if isinstance(self.amount_bits, bool) or not isinstance(self.amount_bits, int) \
                or self.amount_bits <= 0:
            raise ValueError(f"Amount width must be a positive integer, got {self.amount_bits!r}")

    @property
    def max_amount(self) -> int:
        return 2 ** self.amount_bits - 1

    @classmethod
    def from_env(cls) -> "TokenConfig":
        """Load configuration from environment variables, falling back to defaults."""
        decimals = _int_from_env("TOKENLEDGER_DECIMALS", cls.decimals)
        amount_bits = _int_from_env("TOKENLEDGER_AMOUNT_BITS", cls.amount_bits)
        error_prefix = os.getenv("TOKENLEDGER_ERROR_PREFIX", cls.error_prefix)

        config = cls(decimals=decimals, amount_bits=amount_bits, error_prefix=error_prefix)
        logger.info(
            f"Token config: decimals={config.decimals}, "
            f"amount_bits={config.amount_bits}, error_prefix={config.error_prefix!r}")
        return config


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
