# tokenledger/core/token.py

import logging
from typing import List, Optional
from .config import TokenConfig, validate_decimals
from .errors import AlreadyInitializedError, NotInitializedError
from .events import Event, EventLog
from .ledger import Ledger

logger = logging.getLogger(__name__)

class Token:
    """
    A single token instance: name/symbol/decimals metadata around a Ledger.

    The instance must be initialized exactly once before use. Entrypoints
    that act on behalf of an account take the authenticated caller as their
    first argument.
    """
    def __init__(self, config: Optional[TokenConfig] = None,
                 event_log: Optional[EventLog] = None):
        self._event_log = event_log if event_log is not None else EventLog()
        self._ledger = Ledger(self._event_log, config)
        self._name = ""
        self._symbol = ""
        self._decimals = self._ledger.config.decimals
        self.initialized = False

    def initialize(self, name: str, symbol: str, initial_holder: str,
                   initial_supply: int, decimals: Optional[int] = None) -> bool:
        """
        Set token metadata and mint the initial supply to initial_holder.
        The holder must not be the zero address, even for a zero supply.
        """
        self._require_uninitialized()
        if decimals is None:
            decimals = self._ledger.config.decimals
        validate_decimals(decimals)

        self._ledger.mint(initial_holder, initial_supply)
        self._setup(name, symbol, decimals)
        logger.info(
            f"Initialized token {name} ({symbol}), decimals={decimals}, "
            f"supply={initial_supply}")
        return True

    def initialize_with_decimals(self, name: str, symbol: str, decimals: int) -> bool:
        """Initialize with custom decimals and no initial supply."""
        self._require_uninitialized()
        validate_decimals(decimals)

        self._setup(name, symbol, decimals)
        logger.info(f"Initialized token {name} ({symbol}), decimals={decimals}")
        return True

    def _setup(self, name: str, symbol: str, decimals: int):
        self._name = name
        self._symbol = symbol
        self._decimals = decimals
        self.initialized = True

    def _require_uninitialized(self):
        if self.initialized:
            raise AlreadyInitializedError(
                "contract is already initialized", self._ledger.config.error_prefix)

    @property
    def events(self) -> EventLog:
        return self._event_log

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def drain_events(self) -> List[Event]:
        """Events emitted since the last drain, in emission order."""
        return self._event_log.drain()

    def name(self) -> str:
        self._require_initialized()
        return self._name

    def symbol(self) -> str:
        self._require_initialized()
        return self._symbol

    def decimals(self) -> int:
        self._require_initialized()
        return self._decimals

    def total_supply(self) -> int:
        self._require_initialized()
        return self._ledger.total_supply()

    def balance_of(self, account: str) -> int:
        self._require_initialized()
        return self._ledger.balance_of(account)

    def allowance(self, owner: str, spender: str) -> int:
        self._require_initialized()
        return self._ledger.allowance(owner, spender)

    def transfer(self, caller: str, to_address: str, amount: int) -> bool:
        self._require_initialized()
        return self._ledger.transfer(caller, to_address, amount)

    def approve(self, caller: str, spender: str, amount: int) -> bool:
        self._require_initialized()
        return self._ledger.approve(caller, spender, amount)

    def transfer_from(self, caller: str, from_address: str, to_address: str,
                      amount: int) -> bool:
        """Spend caller's allowance over from_address's tokens."""
        self._require_initialized()
        return self._ledger.transfer_from(caller, from_address, to_address, amount)

    def increase_allowance(self, caller: str, spender: str, added_amount: int) -> bool:
        self._require_initialized()
        return self._ledger.increase_allowance(caller, spender, added_amount)

    def decrease_allowance(self, caller: str, spender: str, subtracted_amount: int) -> bool:
        self._require_initialized()
        return self._ledger.decrease_allowance(caller, spender, subtracted_amount)

    def mint(self, to_address: str, amount: int) -> bool:
        self._require_initialized()
        return self._ledger.mint(to_address, amount)

    def burn(self, from_address: str, amount: int) -> bool:
        self._require_initialized()
        return self._ledger.burn(from_address, amount)

    # Internal primitives, exposed so callers can exercise them directly
    # with an arbitrary sender or owner.
    def transfer_internal(self, sender: str, to_address: str, amount: int) -> bool:
        self._require_initialized()
        return self._ledger.transfer(sender, to_address, amount)

    def approve_internal(self, owner: str, spender: str, amount: int) -> bool:
        self._require_initialized()
        return self._ledger.approve(owner, spender, amount)

    def _require_initialized(self):
        if not self.initialized:
            raise NotInitializedError("contract is not initialized",
                                      self._ledger.config.error_prefix)
