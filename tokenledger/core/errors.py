# tokenledger/core/errors.py

class LedgerError(Exception):
    """Base class for all ledger failures."""
    def __init__(self, reason: str, prefix: str = "ERC20"):
        self.reason = reason
        self.prefix = prefix
        super().__init__(f"{prefix}: {reason}" if prefix else reason)

class ZeroAddressError(LedgerError):
    """Raised when the zero identifier is used where a live account is required."""
    pass

class InsufficientBalanceError(LedgerError):
    """Raised when an address has insufficient balance for a transfer or burn."""
    pass

class InsufficientAllowanceError(LedgerError):
    """Raised when a delegated transfer exceeds the remaining allowance."""
    pass

class AllowanceUnderflowError(LedgerError):
    """Raised when an allowance would be decreased below zero."""
    pass

class AmountOverflowError(LedgerError):
    """Raised when an amount would exceed the representable range."""
    pass

class LedgerInvariantError(LedgerError):
    """Raised when supply accounting or zero-address rules are broken."""
    pass

class AlreadyInitializedError(LedgerError):
    """Raised when a token is initialized a second time."""
    pass

class NotInitializedError(LedgerError):
    """Raised when a token is used before initialization."""
    pass
