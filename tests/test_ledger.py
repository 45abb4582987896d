# tokenledger/tests/test_ledger.py

import pytest
from tokenledger.core.accounts import ZERO_ADDRESS
from tokenledger.core.config import TokenConfig
from tokenledger.core.errors import (
    ZeroAddressError,
    InsufficientBalanceError,
    InsufficientAllowanceError,
    AmountOverflowError,
)
from tokenledger.core.events import EventLog
from tokenledger.core.ledger import Ledger

@pytest.fixture
def ledger():
    return Ledger(EventLog())

@pytest.fixture
def funded(ledger):
    ledger.mint("User A", 100)
    ledger._event_log.clear()
    return ledger

def test_initial_state(ledger):
    """Test initial ledger state."""
    assert ledger.balance_of("User A") == 0
    assert ledger.total_supply() == 0

def test_mint(ledger):
    """Test minting new tokens."""
    ledger.mint("User A", 100)
    assert ledger.balance_of("User A") == 100
    assert ledger.total_supply() == 100

def test_mint_to_zero_address(ledger):
    with pytest.raises(ZeroAddressError, match="mint to the zero address"):
        ledger.mint(ZERO_ADDRESS, 50)
    assert ledger.total_supply() == 0
    assert len(ledger._event_log) == 0

def test_mint_overflow():
    ledger = Ledger(EventLog(), TokenConfig(amount_bits=8))
    ledger.mint("User A", 200)

    with pytest.raises(AmountOverflowError):
        ledger.mint("User B", 56)
    assert ledger.total_supply() == 200
    assert ledger.balance_of("User B") == 0

    ledger.mint("User B", 55)
    assert ledger.total_supply() == 255

def test_burn(funded):
    """Test burning tokens."""
    funded.burn("User A", 30)
    assert funded.balance_of("User A") == 70
    assert funded.total_supply() == 70

def test_burn_entire_balance(funded):
    funded.burn("User A", 100)
    assert funded.balance_of("User A") == 0
    assert funded.total_supply() == 0

def test_burn_from_zero_address(funded):
    with pytest.raises(ZeroAddressError, match="burn from the zero address"):
        funded.burn(ZERO_ADDRESS, 1)

def test_transfer(funded):
    """Test transferring tokens between addresses."""
    funded.transfer("User A", "User B", 30)

    assert funded.balance_of("User A") == 70
    assert funded.balance_of("User B") == 30
    assert funded.total_supply() == 100

def test_transfer_entire_balance(funded):
    funded.transfer("User A", "User B", 100)
    assert funded.balance_of("User A") == 0
    assert funded.balance_of("User B") == 100

def test_transfer_zero_amount(funded):
    """Zero transfers are valid and still emit an event."""
    funded.transfer("User A", "User B", 0)

    assert funded.balance_of("User A") == 100
    assert funded.balance_of("User B") == 0
    events = funded._event_log.get_events("Transfer")
    assert len(events) == 1
    assert events[0].params == {"from": "User A", "to": "User B", "value": 0}

def test_transfer_to_self(funded):
    funded.transfer("User A", "User A", 40)
    assert funded.balance_of("User A") == 100
    assert len(funded._event_log.get_events("Transfer")) == 1

def test_transfer_to_zero_address(funded):
    with pytest.raises(ZeroAddressError, match="transfer to the zero address"):
        funded.transfer("User A", ZERO_ADDRESS, 100)
    assert funded.balance_of("User A") == 100

def test_transfer_from_zero_address(funded):
    with pytest.raises(ZeroAddressError, match="transfer from the zero address"):
        funded.transfer(ZERO_ADDRESS, "User B", 100)

def test_insufficient_balance_transfer(funded):
    """Test insufficient balance handling in transfers."""
    with pytest.raises(InsufficientBalanceError, match="transfer amount exceeds balance"):
        funded.transfer("User A", "User B", 101)

    assert funded.balance_of("User A") == 100
    assert funded.balance_of("User B") == 0
    assert len(funded._event_log) == 0

def test_insufficient_balance_burn(funded):
    """Test insufficient balance handling in burns."""
    with pytest.raises(InsufficientBalanceError, match="burn amount exceeds balance"):
        funded.burn("User A", 101)
    assert funded.total_supply() == 100

def test_invalid_amounts(funded):
    with pytest.raises(ValueError):
        funded.transfer("User A", "User B", -1)
    with pytest.raises(ValueError):
        funded.mint("User A", 1.5)
    with pytest.raises(ValueError):
        funded.approve("User A", "User B", True)

def test_amount_above_range(funded):
    with pytest.raises(AmountOverflowError):
        funded.approve("User A", "User B", 2 ** 256)

def test_transfer_from(funded):
    funded.approve("User A", "Spender", 100)
    funded.transfer_from("Spender", "User A", "User B", 100)

    assert funded.balance_of("User A") == 0
    assert funded.balance_of("User B") == 100
    assert funded.allowance("User A", "Spender") == 0

def test_transfer_from_events_in_order(funded):
    funded.approve("User A", "Spender", 100)
    funded._event_log.clear()

    funded.transfer_from("Spender", "User A", "User B", 60)

    events = funded._event_log.get_events()
    assert [e.name for e in events] == ["Transfer", "Approval"]
    assert events[0].params == {"from": "User A", "to": "User B", "value": 60}
    assert events[1].params == {"owner": "User A", "spender": "Spender", "value": 40}

def test_transfer_from_exceeds_allowance(funded):
    funded.approve("User A", "Spender", 99)
    with pytest.raises(InsufficientAllowanceError, match="transfer amount exceeds allowance"):
        funded.transfer_from("Spender", "User A", "User B", 100)
    assert funded.allowance("User A", "Spender") == 99
    assert funded.balance_of("User A") == 100

def test_transfer_from_exceeds_balance(funded):
    funded.approve("User A", "Spender", 101)
    with pytest.raises(InsufficientBalanceError, match="transfer amount exceeds balance"):
        funded.transfer_from("Spender", "User A", "User B", 101)
    assert funded.allowance("User A", "Spender") == 101

def test_transfer_from_exceeds_both_reports_balance(funded):
    """The balance check runs before the allowance check."""
    funded.approve("User A", "Spender", 99)
    with pytest.raises(InsufficientBalanceError, match="transfer amount exceeds balance"):
        funded.transfer_from("Spender", "User A", "User B", 101)

def test_transfer_from_to_zero_address(funded):
    funded.approve("User A", "Spender", 100)
    with pytest.raises(ZeroAddressError, match="transfer to the zero address"):
        funded.transfer_from("Spender", "User A", ZERO_ADDRESS, 100)
    assert funded.allowance("User A", "Spender") == 100

def test_transfer_from_zero_owner(funded):
    with pytest.raises(ZeroAddressError, match="transfer from the zero address"):
        funded.transfer_from("Spender", ZERO_ADDRESS, "User B", 0)

def test_event_emission(ledger):
    """Test that events are properly emitted."""
    event_log = ledger._event_log

    ledger.mint("User A", 100)
    ledger.transfer("User A", "User B", 30)
    ledger.burn("User A", 20)

    events = event_log.get_events()
    assert len(events) == 3

    mint_event = events[0]
    assert mint_event.name == "Transfer"
    assert mint_event.params["from"] == ZERO_ADDRESS
    assert mint_event.params["to"] == "User A"
    assert mint_event.params["value"] == 100

    transfer_event = events[1]
    assert transfer_event.name == "Transfer"
    assert transfer_event.params["from"] == "User A"
    assert transfer_event.params["to"] == "User B"
    assert transfer_event.params["value"] == 30

    burn_event = events[2]
    assert burn_event.name == "Transfer"
    assert burn_event.params["from"] == "User A"
    assert burn_event.params["to"] == ZERO_ADDRESS
    assert burn_event.params["value"] == 20

def test_hex_addresses_are_case_insensitive(ledger):
    ledger.mint("0xABCDEF0000000000000000000000000000000001", 10)
    assert ledger.balance_of("0xabcdef0000000000000000000000000000000001") == 10

def test_error_prefix_is_configurable():
    ledger = Ledger(EventLog(), TokenConfig(error_prefix="MTKN"))
    with pytest.raises(InsufficientBalanceError) as exc_info:
        ledger.burn("User A", 1)
    assert str(exc_info.value) == "MTKN: burn amount exceeds balance"
    assert exc_info.value.reason == "burn amount exceeds balance"

def test_holders(funded):
    funded.transfer("User A", "User B", 100)
    assert funded.holders() == {"User B": 100}

def test_transfer_from_zero_spender(funded):
    with pytest.raises(ZeroAddressError, match="approve to the zero address"):
        funded.transfer_from(ZERO_ADDRESS, "User A", "User B", 0)
    assert funded.balance_of("User A") == 100
