# tokenledger/core/accounts.py

from typing import Optional

ZERO_ADDRESS = "0x" + "0" * 40


def normalize_address(address: Optional[str]) -> str:
    """
    Return the canonical form of an account identifier.
    Hex identifiers are lowercased; other identifiers are treated as opaque.
    """
    if address is None or address == "":
        return ZERO_ADDRESS
    if not isinstance(address, str):
        raise TypeError(f"Account identifier must be a string, got {type(address).__name__}")
    if address[:2] in ("0x", "0X"):
        return "0x" + address[2:].lower()
    return address


def is_zero_address(address: Optional[str]) -> bool:
    return normalize_address(address) == ZERO_ADDRESS
