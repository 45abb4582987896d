# tokenledger/core/ledger.py

import logging
from typing import Dict, Optional, Tuple
from .accounts import ZERO_ADDRESS, normalize_address
from .config import TokenConfig
from .errors import (
    ZeroAddressError,
    InsufficientBalanceError,
    InsufficientAllowanceError,
    AllowanceUnderflowError,
    AmountOverflowError,
    LedgerInvariantError,
)
from .events import EventLog, create_transfer_event, create_approval_event

logger = logging.getLogger(__name__)

class Ledger:
    """
    ERC-20 style token ledger: balances, allowances and total supply.
    Amounts are unsigned integers in base units, bounded by config.max_amount.

    Every mutation validates all of its preconditions before touching state,
    so a failed call changes nothing and emits nothing. Not thread-safe.
    """
    def __init__(self, event_log: EventLog, config: Optional[TokenConfig] = None):
        self._config = config or TokenConfig()
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._event_log = event_log
        self._total_supply: int = 0

    @property
    def config(self) -> TokenConfig:
        return self._config

    def balance_of(self, address: str) -> int:
        """Get the balance of an address."""
        return self._balances.get(normalize_address(address), 0)

    def allowance(self, owner: str, spender: str) -> int:
        """Get the amount spender may still move out of owner's balance."""
        key = (normalize_address(owner), normalize_address(spender))
        return self._allowances.get(key, 0)

    def total_supply(self) -> int:
        """Get total supply of tokens in the system."""
        return self._total_supply

    def holders(self) -> Dict[str, int]:
        """Addresses with a non-zero balance."""
        return {a: b for a, b in self._balances.items() if b > 0}

    def transfer(self, from_address: str, to_address: str, amount: int) -> bool:
        """
        Transfer tokens from one address to another.
        A zero amount or a transfer to self is valid and still emits an event.
        """
        amount = self._check_amount(amount)
        from_address = normalize_address(from_address)
        to_address = normalize_address(to_address)

        self._require_nonzero(from_address, "transfer from the zero address")
        self._require_nonzero(to_address, "transfer to the zero address")
        self._require_balance(from_address, amount, "transfer amount exceeds balance")

        self._move(from_address, to_address, amount)
        self._event_log.emit(create_transfer_event(from_address, to_address, amount))
        logger.debug(f"Transfer {from_address} -> {to_address}: {amount}")
        return True

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Set spender's allowance over owner's tokens, replacing any previous value."""
        amount = self._check_amount(amount)
        owner = normalize_address(owner)
        spender = normalize_address(spender)

        self._require_approval_parties(owner, spender)

        self._set_allowance(owner, spender, amount)
        return True

    def increase_allowance(self, owner: str, spender: str, added_amount: int) -> bool:
        """
        Atomically add to spender's allowance.
        The Approval event carries the resulting allowance, not the delta.
        """
        added_amount = self._check_amount(added_amount)
        owner = normalize_address(owner)
        spender = normalize_address(spender)

        self._require_approval_parties(owner, spender)
        new_allowance = self.allowance(owner, spender) + added_amount
        if new_allowance > self._config.max_amount:
            self._reject(AmountOverflowError, "increased allowance overflows amount range")

        self._set_allowance(owner, spender, new_allowance)
        return True

    def decrease_allowance(self, owner: str, spender: str, subtracted_amount: int) -> bool:
        """
        Atomically subtract from spender's allowance.
        The underflow check runs before the address checks.
        """
        subtracted_amount = self._check_amount(subtracted_amount)
        owner = normalize_address(owner)
        spender = normalize_address(spender)

        current = self.allowance(owner, spender)
        if current < subtracted_amount:
            self._reject(AllowanceUnderflowError, "decreased allowance below zero")
        self._require_approval_parties(owner, spender)

        self._set_allowance(owner, spender, current - subtracted_amount)
        return True

    def transfer_from(self, spender: str, from_address: str, to_address: str,
                      amount: int) -> bool:
        """
        Move tokens on the owner's behalf, spending spender's allowance.

        Checks run in a fixed order: zero addresses, then the owner's balance,
        then the allowance. Emits Transfer followed by Approval with the
        remaining allowance.
        """
        amount = self._check_amount(amount)
        spender = normalize_address(spender)
        from_address = normalize_address(from_address)
        to_address = normalize_address(to_address)

        self._require_nonzero(from_address, "transfer from the zero address")
        self._require_nonzero(to_address, "transfer to the zero address")
        self._require_nonzero(spender, "approve to the zero address")
        self._require_balance(from_address, amount, "transfer amount exceeds balance")
        current_allowance = self.allowance(from_address, spender)
        if current_allowance < amount:
            self._reject(InsufficientAllowanceError, "transfer amount exceeds allowance")

        new_allowance = current_allowance - amount
        self._move(from_address, to_address, amount)
        self._allowances[(from_address, spender)] = new_allowance

        self._event_log.extend([
            create_transfer_event(from_address, to_address, amount),
            create_approval_event(from_address, spender, new_allowance),
        ])
        logger.debug(
            f"TransferFrom {from_address} -> {to_address} by {spender}: {amount} "
            f"(allowance left {new_allowance})")
        return True

    def mint(self, to_address: str, amount: int) -> bool:
        """
        Create new tokens and assign them to an address.
        """
        amount = self._check_amount(amount)
        to_address = normalize_address(to_address)

        self._require_nonzero(to_address, "mint to the zero address")
        if self._total_supply + amount > self._config.max_amount:
            self._reject(AmountOverflowError, "mint amount overflows total supply")

        self._balances[to_address] = self.balance_of(to_address) + amount
        self._total_supply += amount

        self._event_log.emit(create_transfer_event(ZERO_ADDRESS, to_address, amount))
        logger.debug(f"Mint {amount} to {to_address}, total supply {self._total_supply}")
        return True

    def burn(self, from_address: str, amount: int) -> bool:
        """
        Destroy tokens from an address.
        """
        amount = self._check_amount(amount)
        from_address = normalize_address(from_address)

        self._require_nonzero(from_address, "burn from the zero address")
        self._require_balance(from_address, amount, "burn amount exceeds balance")

        self._balances[from_address] = self.balance_of(from_address) - amount
        self._total_supply -= amount

        self._event_log.emit(create_transfer_event(from_address, ZERO_ADDRESS, amount))
        logger.debug(f"Burn {amount} from {from_address}, total supply {self._total_supply}")
        return True

    def check_invariants(self) -> bool:
        """Verify supply accounting and that the zero address holds nothing."""
        if sum(self._balances.values()) != self._total_supply:
            raise LedgerInvariantError(
                f"sum of balances {sum(self._balances.values())} != "
                f"total supply {self._total_supply}", self._config.error_prefix)
        if any(b < 0 for b in self._balances.values()):
            raise LedgerInvariantError("negative balance", self._config.error_prefix)
        if ZERO_ADDRESS in self._balances:
            raise LedgerInvariantError("zero address holds a balance",
                                       self._config.error_prefix)
        if any(ZERO_ADDRESS in key for key in self._allowances):
            raise LedgerInvariantError("zero address appears in an allowance",
                                       self._config.error_prefix)
        return True

    def _check_amount(self, amount: int) -> int:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValueError(f"Amount must be an integer, got {amount!r}")
        if amount < 0:
            raise ValueError("Amount must not be negative")
        if amount > self._config.max_amount:
            self._reject(AmountOverflowError,
                         f"amount exceeds uint{self._config.amount_bits} range")
        return amount

    def _require_nonzero(self, address: str, reason: str):
        if address == ZERO_ADDRESS:
            self._reject(ZeroAddressError, reason)

    def _require_balance(self, address: str, amount: int, reason: str):
        if self.balance_of(address) < amount:
            self._reject(InsufficientBalanceError, reason)

    def _require_approval_parties(self, owner: str, spender: str):
        self._require_nonzero(owner, "approve from the zero address")
        self._require_nonzero(spender, "approve to the zero address")

    def _reject(self, error_cls, reason: str):
        logger.debug(f"Rejected: {reason}")
        raise error_cls(reason, self._config.error_prefix)

    def _move(self, from_address: str, to_address: str, amount: int):
        self._balances[from_address] = self.balance_of(from_address) - amount
        self._balances[to_address] = self.balance_of(to_address) + amount

    def _set_allowance(self, owner: str, spender: str, amount: int):
        self._allowances[(owner, spender)] = amount
        self._event_log.emit(create_approval_event(owner, spender, amount))
        logger.debug(f"Approval {owner} -> {spender}: {amount}")
